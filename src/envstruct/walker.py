# src/envstruct/walker.py
"""
Walker canônico de registros de configuração do envstruct.

Este módulo percorre os campos de uma dataclass de configuração, deriva o
nome de cada variável, resolve o valor bruto e o converte para o tipo
declarado, recursivamente para registros aninhados.

Política de walk (v1):
    - Campos são visitados na ordem de declaração
    - Campo cujo tipo é uma dataclass → recursão com prefixo estendido
      pelo identificador do campo (profundidade arbitrária)
    - Campo folha → nome derivado → resolução → conversão → atribuição
    - Campo folha sem variável e sem tag `default` → `MissingFieldValueError`,
      em qualquer nível de aninhamento
    - Dentro de um registro aninhado, valor vazio (variável vazia ou tag
      `default` vazia) também é `MissingFieldValueError`; no nível raiz o
      vazio segue para a conversão

Decisões arquiteturais:
    - Tipos não suportados são detectados antes da resolução do valor
    - O primeiro erro interrompe o walk; não existe sucesso parcial
    - Todos os valores são resolvidos antes de qualquer atribuição, de modo
      que uma instância nunca fica parcialmente preenchida
    - O ambiente é acessado apenas via `EnvSource`

Invariantes:
    - O nome derivado de um campo aninhado sempre inclui os ancestrais
      (ex.: `database.port` → `DATABASE_PORT`)
    - Tags `env` e `default` são lidas de `Field.metadata`

Limites explícitos:
    - Não suporta Optional, Union ou registros polimórficos
    - Não sincroniza acesso concorrente ao ambiente do processo
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from typing import Any, Dict, Iterator, Optional, Tuple, Type, TypeVar, Union

from .convert import convert, ensure_supported, type_name
from .errors import MissingFieldValueError, UnsupportedFieldTypeError
from .loader import PathLike, load_all
from .naming import camel_to_snake, join_path
from .resolver import resolve
from .source import EnvSource, default_source
from .tags import FieldSpec

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_record_type(hint: Any) -> bool:
    """Indica se o tipo declarado é um registro aninhado (classe dataclass)."""
    return isinstance(hint, type) and dataclasses.is_dataclass(hint)


def iter_fields(
    record_type: type,
    prefix: str = "",
) -> Iterator[Tuple[dataclasses.Field, Any, str]]:
    """
    Itera `(field, hint, path)` sobre os campos de uma dataclass.

    `path` é o identificador acumulado com os ancestrais
    (ex.: "database_port"); os hints são resolvidos via
    `typing.get_type_hints`, suportando anotações em string.
    """
    hints = typing.get_type_hints(record_type)
    for f in dataclasses.fields(record_type):
        yield f, hints.get(f.name, f.type), join_path(prefix, f.name)


def _collect(
    record_type: type,
    prefix: str,
    environ: EnvSource,
    nested: bool = False,
) -> Dict[str, Any]:
    values: Dict[str, Any] = {}

    for f, hint, path in iter_fields(record_type, prefix):
        if is_record_type(hint):
            values[f.name] = _build(hint, path, environ, nested=True)
            continue

        ensure_supported(hint, field=f.name)

        spec = FieldSpec.from_field(f, hint, camel_to_snake(path))
        raw = resolve(spec, environ)
        # registros aninhados exigem valor não vazio
        if raw is None or (nested and raw == ""):
            raise MissingFieldValueError(f.name)

        values[f.name] = convert(hint, raw, field=f.name)

    return values


def _build(
    record_type: Type[T],
    prefix: str,
    environ: EnvSource,
    nested: bool = False,
) -> T:
    values = _collect(record_type, prefix, environ, nested)
    init_fields = {f.name for f in dataclasses.fields(record_type) if f.init}

    record = record_type(**{k: v for k, v in values.items() if k in init_fields})
    for name, val in values.items():
        if name not in init_fields:
            object.__setattr__(record, name, val)
    return record


def populate(
    record: Union[T, Type[T]],
    *,
    environ: Optional[EnvSource] = None,
    prefix: str = "",
) -> T:
    """
    Preenche um registro de configuração a partir do ambiente.

    Aceita uma classe dataclass (uma nova instância é criada e retornada)
    ou uma instância existente (mutada in-place e retornada).

    Decisões arquiteturais:
        - Prioridade por campo: tag `env` → nome derivado → tag `default`
        - Variável presente com valor vazio conta como encontrada no nível
          raiz; em registros aninhados o vazio é tratado como ausente
        - O prefixo inicial não torna o nível raiz aninhado
        - Instâncias frozen são preenchidas via `object.__setattr__`
        - Nenhuma atribuição ocorre se qualquer campo falhar

    Args:
        record: Classe ou instância de dataclass.
        environ: Fonte de ambiente (padrão: `os.environ`).
        prefix: Prefixo inicial dos nomes derivados (vazio no topo).

    Returns:
        Instância preenchida.

    Raises:
        MissingFieldValueError: Campo sem variável e sem tag default, ou
            campo aninhado com valor vazio.
        ConversionError: Falha de conversão (subclasse tipada).
        UnsupportedFieldTypeError: Registro incompatível com o conversor.
    """
    target = environ if environ is not None else default_source()

    if isinstance(record, type):
        if not dataclasses.is_dataclass(record):
            raise UnsupportedFieldTypeError(type_name(record))
        out = _build(record, prefix, target)
        logger.debug("populated %s", record.__name__)
        return out

    if not dataclasses.is_dataclass(record):
        raise UnsupportedFieldTypeError(type_name(type(record)))

    values = _collect(type(record), prefix, target)
    for name, val in values.items():
        object.__setattr__(record, name, val)
    logger.debug("populated %s instance", type(record).__name__)
    return record


def parse_to(
    record: Union[T, Type[T]],
    *paths: PathLike,
    environ: Optional[EnvSource] = None,
) -> T:
    """
    Carrega arquivos dotenv e preenche o registro.

    Os arquivos são carregados em ordem (posteriores sobrescrevem
    anteriores; sem caminhos, `.env`) e em seguida o registro é preenchido
    a partir da mesma fonte de ambiente.

    Raises:
        EnvFileError, EnvSetError: Falha ao carregar algum arquivo.
        FieldError: Qualquer falha do walk (ver `populate`).
    """
    target = environ if environ is not None else default_source()
    load_all(*paths, environ=target)
    return populate(record, environ=target)
