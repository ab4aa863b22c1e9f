# src/envstruct/resolver.py
"""
Resolução do valor bruto (string) de um campo folha.

Política de prioridade (v1):
    1. variável nomeada pela tag `env` (override)
    2. variável nomeada pelo nome derivado
    3. tag `default`

Uma variável presente com valor vazio conta como encontrada e interrompe a
busca no seu nível de prioridade.
"""

from __future__ import annotations

from typing import Optional

from .source import EnvSource
from .tags import FieldSpec


def resolve(spec: FieldSpec, environ: EnvSource) -> Optional[str]:
    """
    Retorna a primeira string encontrada para o campo, ou None.

    None significa "sem variável e sem tag default"; quem decide se isso é
    erro é o walker.
    """
    if spec.override:
        val = environ.lookup(spec.override)
        if val is not None:
            return val

    val = environ.lookup(spec.derived)
    if val is not None:
        return val

    return spec.default
