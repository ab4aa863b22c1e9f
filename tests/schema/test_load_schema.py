# tests/schema/test_load_schema.py
"""
Testes do schema declarativo de registros (load_schema / build_record).

Este módulo valida que um registro descrito em YAML ou JSON:
- é convertido em uma dataclass equivalente
- é preenchido pelo walker como uma classe escrita à mão
- rejeita formatos, raízes e tipos inválidos explicitamente

Decisões arquiteturais:
    - O schema é fornecido como string e escrito em `tmp_path`
    - Defaults não-string do YAML são normalizados antes do walk
"""

import dataclasses
import json
from datetime import timedelta
from pathlib import Path

import pytest

from envstruct import populate
from envstruct.errors import (
    IntegerParseError,
    InvalidSchemaError,
    SchemaNotFoundError,
    UnsupportedSchemaFormatError,
)
from envstruct.schema import build_record, load_schema


@pytest.fixture
def app_schema_yaml() -> str:
    """
    Fixture que fornece um schema YAML semelhante ao uso real.

    Returns:
        str: Schema com campos escalares, lista, duração e registro aninhado.
    """
    return """\
name: AppConfig
fields:
  - name: home
    type: str
    env: HOME
  - name: debug
    type: bool
    default: false
  - name: workers
    type: uint8
    default: 4
  - name: timeout
    type: duration
    default: 5s
  - name: origins
    type: list[str]
    default: [a.com, b.com]
  - name: database
    type: record
    fields:
      - name: port
        type: int
        default: 5432
      - name: host
        type: str
"""


def test_yaml_schema_builds_dataclass(tmp_path: Path, app_schema_yaml, make_env):
    path = tmp_path / "app.yaml"
    path.write_text(app_schema_yaml, encoding="utf-8")

    record_type = load_schema(path)

    assert dataclasses.is_dataclass(record_type)
    assert record_type.__name__ == "AppConfig"
    assert [f.name for f in dataclasses.fields(record_type)] == [
        "home", "debug", "workers", "timeout", "origins", "database",
    ]

    cfg = populate(record_type, environ=make_env({"HOME": "/home/test", "DATABASE_HOST": "db"}))

    assert cfg.home == "/home/test"
    assert cfg.debug is False
    assert cfg.workers == 4
    assert cfg.timeout == timedelta(seconds=5)
    assert cfg.origins == ["a.com", "b.com"]
    assert cfg.database.port == 5432
    assert cfg.database.host == "db"
    assert type(cfg.database).__name__ == "Database"


def test_json_schema(tmp_path: Path, memory_env):
    path = tmp_path / "service-config.json"
    path.write_text(json.dumps({"fields": [{"name": "level", "default": "info"}]}), encoding="utf-8")

    record_type = load_schema(path)

    assert record_type.__name__ == "ServiceConfig"
    assert populate(record_type, environ=memory_env).level == "info"


def test_missing_schema(tmp_path: Path):
    with pytest.raises(SchemaNotFoundError):
        load_schema(tmp_path / "absent.yaml")


def test_unsupported_format(tmp_path: Path):
    path = tmp_path / "schema.toml"
    path.write_text("", encoding="utf-8")

    with pytest.raises(UnsupportedSchemaFormatError):
        load_schema(path)


def test_invalid_root(tmp_path: Path):
    path = tmp_path / "schema.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(InvalidSchemaError, match="root"):
        load_schema(path)


@pytest.mark.parametrize(
    "spec",
    [
        {},
        {"fields": []},
        {"fields": ["home"]},
        {"fields": [{"name": "class"}]},
        {"fields": [{"name": "a"}, {"name": "a"}]},
        {"fields": [{"name": "a", "type": "complex"}]},
        {"fields": [{"name": "a", "env": 3}]},
        {"fields": [{"name": "a", "default": {"x": 1}}]},
        {"fields": [{"name": "a", "type": "record"}]},
        {"name": "not valid", "fields": [{"name": "a"}]},
    ],
)
def test_invalid_specs(spec):
    with pytest.raises(InvalidSchemaError):
        build_record(spec)


def test_width_types_use_converter_markers(make_env):
    """
    Verifica que tipos com largura de bits do schema resolvem para os
    marcadores do conversor e respeitam seus limites.
    """
    from envstruct.convert import Int8, Uint64

    record_type = build_record(
        {"fields": [{"name": "small", "type": "int8"}, {"name": "big", "type": "uint64"}]}
    )
    hints = {f.name: f.type for f in dataclasses.fields(record_type)}

    assert hints == {"small": Int8, "big": Uint64}

    cfg = populate(record_type, environ=make_env({"SMALL": "-128", "BIG": "18446744073709551615"}))
    assert (cfg.small, cfg.big) == (-128, 2**64 - 1)

    with pytest.raises(IntegerParseError) as exc_info:
        populate(record_type, environ=make_env({"SMALL": "128", "BIG": "0"}))
    assert exc_info.value.field == "small"
