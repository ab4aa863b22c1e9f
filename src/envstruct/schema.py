# src/envstruct/schema.py
"""
Schema declarativo de registros de configuração.

Este módulo permite descrever um registro de configuração em um arquivo
YAML ou JSON, em vez de declarar a dataclass em código. O schema é
convertido em uma dataclass equivalente (via `dataclasses.make_dataclass`)
que o walker percorre exatamente como uma classe escrita à mão.

Formato (v1):

    name: AppConfig
    fields:
      - name: home
        type: str
        env: HOME
      - name: timeout
        type: duration
        default: 5s
      - name: database
        type: record        # classe "Database" (ou `class: ...`)
        fields:
          - name: port
            type: int
            default: 5432

Tipos suportados:
    str, int, int8…int64, unsigned, uint8…uint64, float, bool,
    duration, list[str], record

Decisões arquiteturais:
    - Apenas formatos explícitos são aceitos (por extensão do arquivo)
    - Tags `default` não-string do YAML (números, booleanos, listas) são
      normalizadas para a string equivalente antes do walk
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - Identificadores de campo são únicos por nível
    - Todo registro aninhado declara pelo menos um campo

Limites explícitos:
    - Não preenche o registro (ver `walker.populate`)
    - Não valida semântica de domínio
"""

from __future__ import annotations

import dataclasses
import json
import keyword
import re
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import yaml  # PyYAML

from .convert import (
    LIST_SEPARATOR,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    Unsigned,
)
from .errors import InvalidSchemaError, SchemaNotFoundError, UnsupportedSchemaFormatError
from .tags import env_field

RECORD = "record"

TYPE_NAMES: Dict[str, Any] = {
    "str": str,
    "string": str,
    "int": int,
    "integer": int,
    "int8": Int8,
    "int16": Int16,
    "int32": Int32,
    "int64": Int64,
    "unsigned": Unsigned,
    "uint": Unsigned,
    "uint8": Uint8,
    "uint16": Uint16,
    "uint32": Uint32,
    "uint64": Uint64,
    "float": float,
    "bool": bool,
    "boolean": bool,
    "duration": timedelta,
    "list[str]": List[str],
}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de schema e valida o tipo raiz.

    Raises:
        SchemaNotFoundError: Se o arquivo não existir.
        UnsupportedSchemaFormatError: Se a extensão não for suportada.
        InvalidSchemaError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise SchemaNotFoundError(f"Arquivo de schema não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedSchemaFormatError(f"Formato não suportado: {path.suffix}")

    if not isinstance(data, dict):
        raise InvalidSchemaError(
            f"Schema root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def _default_to_str(name: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return LIST_SEPARATOR.join(value)
    raise InvalidSchemaError(
        f"Default inválido no campo '{name}': {type(value).__name__}"
    )


def _class_name(field_name: str) -> str:
    out = "".join(part[:1].upper() + part[1:] for part in re.split(r"[^0-9A-Za-z]+", field_name) if part)
    return out if out.isidentifier() else "Config"


def build_record(spec: Mapping[str, Any], *, name: str = "Config") -> type:
    """
    Constrói uma dataclass a partir de um schema já carregado.

    Args:
        spec: Dicionário com `fields` (e opcionalmente `name`).
        name: Nome da classe quando o schema não declara `name`.

    Returns:
        type: Dataclass equivalente ao schema.

    Raises:
        InvalidSchemaError: Estrutura, identificador ou tipo inválido.
    """
    cls_name = spec.get("name") or name
    if not isinstance(cls_name, str) or not cls_name.isidentifier():
        raise InvalidSchemaError(f"Nome de registro inválido: {cls_name!r}")

    fields = spec.get("fields")
    if not isinstance(fields, list) or not fields:
        raise InvalidSchemaError(f"Registro '{cls_name}' deve declarar uma lista não vazia de fields")

    seen = set()
    members = []
    for item in fields:
        if not isinstance(item, dict):
            raise InvalidSchemaError(f"Field de '{cls_name}' deve ser dict, recebido: {type(item).__name__}")

        fname = item.get("name")
        if not isinstance(fname, str) or not fname.isidentifier() or keyword.iskeyword(fname):
            raise InvalidSchemaError(f"Identificador de field inválido em '{cls_name}': {fname!r}")
        if fname in seen:
            raise InvalidSchemaError(f"Field duplicado em '{cls_name}': {fname}")
        seen.add(fname)

        tname = str(item.get("type", "str")).strip().lower()
        if tname == RECORD:
            nested = {"name": item.get("class") or _class_name(fname), "fields": item.get("fields")}
            hint = build_record(nested)
            members.append((fname, hint))
            continue

        if tname not in TYPE_NAMES:
            raise InvalidSchemaError(f"Tipo desconhecido no field '{fname}': {tname}")

        env = item.get("env")
        if env is not None and (not isinstance(env, str) or not env):
            raise InvalidSchemaError(f"Tag env inválida no field '{fname}': {env!r}")

        default = item.get("default")
        members.append(
            (
                fname,
                TYPE_NAMES[tname],
                env_field(
                    env=env,
                    default=None if default is None else _default_to_str(fname, default),
                ),
            )
        )

    return dataclasses.make_dataclass(cls_name, members)


def load_schema(path: Union[str, Path]) -> type:
    """
    Carrega um schema YAML/JSON e retorna a dataclass correspondente.

    Raises:
        SchemaNotFoundError: Se o arquivo não existir.
        UnsupportedSchemaFormatError: Se o formato não for suportado.
        InvalidSchemaError: Se o conteúdo for estruturalmente inválido.
    """
    pth = Path(path)
    return build_record(_load_file(pth), name=_class_name(pth.stem))
