# src/envstruct/errors.py
"""
Exceções canônicas do envstruct.

Este módulo define a hierarquia oficial de exceções utilizadas durante o
carregamento de arquivos dotenv, a escrita no ambiente e o preenchimento
de registros de configuração (dataclasses).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Falhas de conversão preservam o erro original como causa (`__cause__`)
    - Nenhuma falha é silenciada ou reexecutada automaticamente

Invariantes:
    - Todas as exceções do pacote herdam de `EnvError`
    - Erros de campo sempre carregam o identificador do campo (`field`)
    - Mensagens seguem o formato "<operação>: <detalhe>"

Limites explícitos:
    - Não executa recovery ou fallback
    - Não formata mensagens para UI
"""

from typing import Any, Optional


class EnvError(Exception):
    """
    Exceção base para todos os erros do envstruct.

    Permite captura genérica de falhas de carregamento, escrita no ambiente
    e preenchimento de registros.
    """


class EnvFileError(EnvError):
    """
    Falha de I/O ao abrir ou ler um arquivo dotenv.

    Decisões arquiteturais:
        - Arquivo inexistente NÃO é erro (fonte vazia)
        - Qualquer outra falha de I/O é propagada encapsulada
    """

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class EnvSetError(EnvError):
    """Falha ao definir uma variável no ambiente (nome inválido, etc.)."""

    def __init__(self, message: str, *, key: str, value: str) -> None:
        super().__init__(message)
        self.key = key
        self.value = value


# ---------------------------------------------------------------------------
# Erros de campo
# ---------------------------------------------------------------------------

class FieldError(EnvError):
    """
    Exceção base para erros associados a um campo específico do registro.

    Atributos:
        field: identificador do campo (nome do atributo da dataclass),
            ou None quando o erro surge fora do contexto de um campo.
    """

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class MissingFieldValueError(FieldError):
    """
    Nenhum valor resolvido para um campo obrigatório.

    Levantada quando o campo não possui variável de override, variável
    derivada nem tag `default`.
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"no value for field: {field}", field=field)


class UnsupportedFieldTypeError(FieldError):
    """Tipo declarado do campo não é suportado pelo conversor."""

    def __init__(self, type_name: str, *, field: Optional[str] = None) -> None:
        super().__init__(f"unsupported field type: {type_name}", field=field)
        self.type_name = type_name


class UnsupportedSliceKindError(UnsupportedFieldTypeError):
    """Lista declarada com elementos diferentes de `str`."""

    def __init__(self, kind: str, *, field: Optional[str] = None) -> None:
        FieldError.__init__(self, f"unsupported slice kind: {kind}", field=field)
        self.type_name = kind


class ConversionError(FieldError):
    """
    Falha ao converter a string resolvida para o tipo declarado do campo.

    Cada subclasse define `operation`, usado como prefixo da mensagem
    ("parsing integer: ..."). O erro da biblioteca subjacente é sempre
    encadeado como `__cause__` por quem levanta a exceção.

    Atributos:
        value: string que falhou na conversão.
    """

    operation = "parsing value"

    def __init__(self, detail: Any, *, value: str, field: Optional[str] = None) -> None:
        super().__init__(f"{self.operation}: {detail}", field=field)
        self.value = value


class DurationParseError(ConversionError):
    operation = "parsing duration"


class IntegerParseError(ConversionError):
    operation = "parsing integer"


class UnsignedIntegerParseError(ConversionError):
    operation = "parsing unsigned integer"


class FloatParseError(ConversionError):
    operation = "parsing float"


class BoolParseError(ConversionError):
    operation = "parsing bool"


# ---------------------------------------------------------------------------
# Erros de schema declarativo
# ---------------------------------------------------------------------------

class SchemaError(EnvError):
    """Exceção base para falhas ao carregar um schema declarativo de registro."""


class SchemaNotFoundError(SchemaError):
    """Arquivo de schema não encontrado no caminho especificado."""


class UnsupportedSchemaFormatError(SchemaError):
    """
    Formato do arquivo de schema não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidSchemaError(SchemaError):
    """Conteúdo do schema estruturalmente inválido (raiz, campos ou tipos)."""
