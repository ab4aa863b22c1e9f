# src/envstruct/__init__.py
"""
envstruct — carregamento de dotenv e preenchimento tipado de configuração.

Este pacote carrega pares `KEY=VALUE` de arquivos dotenv para o ambiente e
preenche registros de configuração (dataclasses) a partir desse ambiente ou
de defaults explícitos, convertendo strings para os tipos declarados.

Arquitetura em alto nível:
    - source   → fontes de ambiente (`os.environ` ou memória isolada)
    - loader   → parse de linhas e carregamento de arquivos dotenv
    - naming   → derivação de nomes UPPER_SNAKE_CASE com prefixo de ancestrais
    - tags     → tags de campo `env` e `default`
    - resolver → prioridade override → nome derivado → default
    - convert  → conversão tipada com erros encadeados
    - walker   → percurso recursivo do registro
    - schema   → registros descritos em YAML/JSON

Uso típico:

    @dataclass
    class Config:
        home: str = env_field(env="HOME")
        timeout: timedelta = env_field(default="5s")

    cfg = parse_to(Config, ".env", ".env.local")

Limites explícitos:
    - Não é um framework geral de serialização ou validação
    - Não sincroniza acesso concorrente ao ambiente do processo
"""

from .convert import (
    Int8,
    Int16,
    Int32,
    Int64,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    Unsigned,
    convert,
    parse_duration,
)
from .errors import (
    BoolParseError,
    ConversionError,
    DurationParseError,
    EnvError,
    EnvFileError,
    EnvSetError,
    FieldError,
    FloatParseError,
    IntegerParseError,
    InvalidSchemaError,
    MissingFieldValueError,
    SchemaError,
    SchemaNotFoundError,
    UnsignedIntegerParseError,
    UnsupportedFieldTypeError,
    UnsupportedSchemaFormatError,
    UnsupportedSliceKindError,
)
from .loader import load, load_all, parse_line
from .naming import camel_to_snake, derive_name
from .resolver import resolve
from .schema import build_record, load_schema
from .source import EnvSource, MemoryEnviron, OsEnviron
from .tags import FieldSpec, env_field
from .walker import parse_to, populate

__all__ = [
    # fontes e loader
    "EnvSource",
    "OsEnviron",
    "MemoryEnviron",
    "parse_line",
    "load",
    "load_all",
    # registros
    "env_field",
    "FieldSpec",
    "camel_to_snake",
    "derive_name",
    "resolve",
    "convert",
    "parse_duration",
    "populate",
    "parse_to",
    "build_record",
    "load_schema",
    # marcadores de tipo
    "Unsigned",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    # erros
    "EnvError",
    "EnvFileError",
    "EnvSetError",
    "FieldError",
    "MissingFieldValueError",
    "UnsupportedFieldTypeError",
    "UnsupportedSliceKindError",
    "ConversionError",
    "DurationParseError",
    "IntegerParseError",
    "UnsignedIntegerParseError",
    "FloatParseError",
    "BoolParseError",
    "SchemaError",
    "SchemaNotFoundError",
    "UnsupportedSchemaFormatError",
    "InvalidSchemaError",
]
