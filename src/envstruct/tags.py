# src/envstruct/tags.py
"""
Tags de campo e descrição canônica de um campo folha.

Tags reconhecidas (armazenadas em `dataclasses.Field.metadata`):
    - `env`     → nome explícito da variável de override
    - `default` → valor estático de fallback (string, convertida depois)

Exemplo:
    @dataclass
    class Config:
        home: str = env_field(env="HOME")
        timeout: timedelta = env_field(default="5s")
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping, Optional

TAG_ENV = "env"
TAG_DEFAULT = "default"


def env_field(
    env: Optional[str] = None,
    default: Optional[str] = None,
    *,
    metadata: Optional[Mapping[str, Any]] = None,
    **field_kwargs: Any,
) -> Any:
    """
    Declara um campo de registro com tags `env` e `default`.

    Equivale a `dataclasses.field(metadata={"env": ..., "default": ...})`.
    A tag `default` é uma string bruta e NÃO é o default Python do
    dataclass (use `field_kwargs` para isso, ex.: `default_factory`).
    """
    meta = dict(metadata or {})
    if env is not None:
        meta[TAG_ENV] = env
    if default is not None:
        meta[TAG_DEFAULT] = default
    return dataclasses.field(metadata=meta, **field_kwargs)


@dataclass(frozen=True)
class FieldSpec:
    """
    Descrição imutável de um campo folha durante o walk.

    Atributos:
        name: identificador do campo (atributo da dataclass)
        hint: tipo declarado, já resolvido via `typing.get_type_hints`
        derived: nome implícito (UPPER_SNAKE_CASE com prefixo de ancestrais)
        override: nome explícito da tag `env`, se houver
        default: valor da tag `default`, se houver
    """

    name: str
    hint: Any
    derived: str
    override: Optional[str] = None
    default: Optional[str] = None

    @classmethod
    def from_field(cls, f: "dataclasses.Field[Any]", hint: Any, derived: str) -> "FieldSpec":
        return cls(
            name=f.name,
            hint=hint,
            derived=derived,
            override=f.metadata.get(TAG_ENV) or None,
            default=f.metadata.get(TAG_DEFAULT),
        )
