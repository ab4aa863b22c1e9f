# tests/conftest.py
"""
Fixtures compartilhados para testes do envstruct.

Este módulo define fixtures reutilizáveis que fornecem:
- fontes de ambiente isoladas em memória (MemoryEnviron)
- uma fábrica de arquivos dotenv em `tmp_path`
- proteção do `os.environ` real para testes que o mutam

Decisões arquiteturais:
    - Testes do walker e do resolver usam MemoryEnviron, nunca o ambiente real
    - Testes que tocam `os.environ` restauram o snapshot original no teardown
    - Arquivos dotenv são sempre escritos em diretórios temporários

Invariantes:
    - Nenhuma fixture deixa variáveis residuais no processo
    - Cada teste recebe uma fonte de ambiente nova e vazia

Limites explícitos:
    - Não validar comportamento funcional (isso é papel dos testes)
"""

import os
from pathlib import Path

import pytest


@pytest.fixture
def memory_env():
    """
    Fixture que fornece uma fonte de ambiente vazia e isolada.

    Returns:
        MemoryEnviron: Fonte nova, sem nenhuma variável.
    """
    from envstruct.source import MemoryEnviron

    return MemoryEnviron()


@pytest.fixture
def make_env():
    """Fixture factory: `make_env({"HOME": "/home/test"})` → MemoryEnviron."""
    from envstruct.source import MemoryEnviron

    def _make(vars=None):
        return MemoryEnviron(vars or {})

    return _make


@pytest.fixture
def write_dotenv(tmp_path: Path):
    """
    Fixture factory que escreve um arquivo dotenv e retorna seu caminho.

    Aceita tanto um dicionário (escrito como `KEY=VALUE` por linha) quanto
    o conteúdo bruto em string, para testar linhas malformadas.
    """

    def _write(content, name: str = ".env") -> Path:
        if isinstance(content, dict):
            content = "".join(f"{k}={v}\n" for k, v in content.items())
        path = tmp_path / name
        path.write_text(content, encoding="utf-8", newline="")
        return path

    return _write


@pytest.fixture
def restore_environ():
    """
    Fixture que restaura o `os.environ` real após o teste.

    Usada pelos testes que carregam arquivos no ambiente do processo.
    """
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)
