# src/envstruct/source.py
"""
Fontes de ambiente (chave → valor) consumidas pelo loader e pelo resolver.

O ambiente do processo é um recurso global e mutável. Este módulo isola
todas as leituras e escritas atrás de uma interface estreita
(`lookup` / `set`), permitindo que testes e chamadores injetem um
armazenamento em memória isolado em vez de mutar o estado real do processo.

Decisões arquiteturais:
    - `lookup` distingue ausência (`None`) de valor vazio (`""`)
    - `set` sempre sobrescreve valores existentes
    - Falhas de escrita são encapsuladas em `EnvSetError`

Invariantes:
    - Chaves e valores são sempre `str`
    - Nome vazio nunca é aceito como chave

Limites explícitos:
    - Não oferece sincronização entre threads
    - Não remove variáveis
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional, Protocol, runtime_checkable

from .errors import EnvSetError


@runtime_checkable
class EnvSource(Protocol):
    """
    Protocolo mínimo de uma fonte de variáveis de ambiente.

    Implementações:
        - `OsEnviron`     → ambiente real do processo (`os.environ`)
        - `MemoryEnviron` → dicionário isolado, ideal para testes
    """

    def lookup(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str) -> None:
        ...


def _check_name(name: str, value: str) -> None:
    if not name or "=" in name or "\x00" in name:
        raise EnvSetError(
            f"setting {name}[{value}]: invalid environment variable name",
            key=name,
            value=value,
        )


class OsEnviron:
    """Fonte de ambiente apoiada em `os.environ`."""

    def lookup(self, name: str) -> Optional[str]:
        if not name:
            return None
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        _check_name(name, value)
        try:
            os.environ[name] = value
        except (OSError, ValueError) as exc:
            raise EnvSetError(f"setting {name}[{value}]: {exc}", key=name, value=value) from exc

    def __repr__(self) -> str:
        return "OsEnviron()"


class MemoryEnviron:
    """
    Fonte de ambiente isolada em memória.

    O mapeamento inicial é copiado; mutações posteriores não afetam o
    dicionário original nem o ambiente do processo.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._vars: Dict[str, str] = dict(initial) if initial else {}

    def lookup(self, name: str) -> Optional[str]:
        return self._vars.get(name)

    def set(self, name: str, value: str) -> None:
        _check_name(name, value)
        self._vars[name] = value

    def as_dict(self) -> Dict[str, str]:
        return dict(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"MemoryEnviron({self._vars!r})"


def default_source() -> EnvSource:
    """Retorna a fonte padrão: o ambiente do processo."""
    return OsEnviron()
