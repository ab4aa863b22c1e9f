# src/envstruct/loader.py
"""
Loader canônico de arquivos dotenv do envstruct.

Este módulo é responsável por ler arquivos no formato `KEY=VALUE` e aplicar
cada par à fonte de ambiente (por padrão, o ambiente do processo).

Formato suportado (v1):
    - Um par `KEY=VALUE` por linha
    - Linhas vazias são ignoradas
    - Linhas sem `=` ou com `=` na posição 0 são ignoradas
    - Sem aspas, sem comentários, sem valores multi-linha
    - Nenhum trimming de espaços é aplicado
    - Terminadores LF e CRLF são removidos; CR isolado é mantido

Decisões arquiteturais:
    - Arquivo inexistente é tratado como "nada a carregar"
    - Demais falhas de I/O são propagadas como `EnvFileError`
    - Cada par carregado sobrescreve valores existentes de mesmo nome
    - O handle do arquivo é sempre liberado; falha ao fechar é apenas logada

Invariantes:
    - Carregar o mesmo arquivo duas vezes produz o mesmo estado final
    - Em múltiplos arquivos, arquivos posteriores sobrescrevem anteriores

Limites explícitos:
    - Não expande variáveis (`$VAR`)
    - Não preenche registros (ver `walker`)
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Tuple, Union

from .errors import EnvFileError
from .source import EnvSource, default_source

logger = logging.getLogger(__name__)

DEFAULT_DOTENV = ".env"

PathLike = Union[str, "os.PathLike[str]"]


def parse_line(line: str) -> Tuple[str, str]:
    """
    Divide uma linha bruta em chave e valor no primeiro `=`.

    Política de parse (v1):
        - Sem `=` ou `=` na posição 0 → `("", "")` (linha ignorada)
        - Caso contrário → tudo antes do primeiro `=` é a chave e tudo
          depois (inclusive outros `=`, possivelmente vazio) é o valor

    Args:
        line (str): Linha do arquivo, sem terminador.

    Returns:
        Tuple[str, str]: Par (chave, valor).
    """
    i = line.find("=")
    if i <= 0:
        return "", ""
    return line[:i], line[i + 1:]


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def load(path: Optional[PathLike] = DEFAULT_DOTENV, *, environ: Optional[EnvSource] = None) -> int:
    """
    Carrega um arquivo dotenv na fonte de ambiente.

    Esta função lê o arquivo linha a linha e aplica cada par `KEY=VALUE`
    válido à fonte de ambiente, sobrescrevendo valores já existentes.

    Decisões arquiteturais:
        - Caminho vazio ou None equivale a `.env`
        - Arquivo inexistente retorna 0 sem erro
        - Linhas vazias são descartadas antes do parse
        - Linhas malformadas são ignoradas silenciosamente
        - O arquivo é sempre fechado; falha no close gera apenas WARNING

    Invariantes:
        - Valores existentes de mesmo nome são sempre sobrescritos
        - A ordem de aplicação segue a ordem das linhas

    Args:
        path: Caminho do arquivo dotenv.
        environ: Fonte de ambiente de destino (padrão: `os.environ`).

    Returns:
        int: Quantidade de pares aplicados.

    Raises:
        EnvFileError: Se o arquivo existir mas não puder ser aberto ou lido.
        EnvSetError: Se uma variável não puder ser definida.
    """
    target = environ if environ is not None else default_source()
    pth = os.fspath(path) if path else DEFAULT_DOTENV

    try:
        # só `\n` termina uma linha; `\r` isolado pertence ao valor
        handle = open(pth, "r", encoding="utf-8", newline="\n")
    except FileNotFoundError:
        logger.debug("dotenv file not found, nothing to load: %s", pth)
        return 0
    except OSError as exc:
        raise EnvFileError(f"opening dotenv file: {exc}", path=pth) from exc

    applied = 0
    try:
        try:
            for raw in handle:
                line = _strip_terminator(raw)
                if line == "":
                    continue

                key, val = parse_line(line)
                if not key:
                    continue

                target.set(key, val)
                applied += 1
        except (OSError, UnicodeDecodeError) as exc:
            raise EnvFileError(f"reading dotenv file: {exc}", path=pth) from exc
    finally:
        try:
            handle.close()
        except OSError as exc:
            logger.warning("closing dotenv file %s: %s", pth, exc)

    logger.debug("loaded %d variable(s) from %s", applied, pth)
    return applied


def load_all(*paths: PathLike, environ: Optional[EnvSource] = None) -> int:
    """
    Carrega múltiplos arquivos dotenv em ordem.

    Cada arquivo posterior pode sobrescrever chaves de arquivos anteriores.
    Sem caminhos, carrega apenas `.env`.

    Returns:
        int: Total de pares aplicados somando todos os arquivos.
    """
    target = environ if environ is not None else default_source()
    total = 0
    for pth in paths or (DEFAULT_DOTENV,):
        total += load(pth, environ=target)
    return total
