# src/envstruct/naming.py
"""
Derivação de nomes implícitos de variáveis de ambiente.

Converte o identificador de um campo (opcionalmente prefixado pelo caminho
dos registros ancestrais) para UPPER_SNAKE_CASE.

Exemplos:
    PascalCase        → PASCAL_CASE
    camelCase         → CAMEL_CASE
    snake_case        → SNAKE_CASE
    DBPort            → DB_PORT
    database_dbPort   → DATABASE_DB_PORT
"""

from __future__ import annotations

PATH_SEPARATOR = "_"


def camel_to_snake(name: str) -> str:
    """
    Converte CamelCase / camelCase / snake_case para UPPER_SNAKE_CASE.

    Um novo segmento começa em uma letra maiúscula (fora do índice 0) que
    segue um caractere não-maiúsculo, ou que encerra uma sequência de
    maiúsculas (sigla) seguida de minúscula. Underscores existentes são
    preservados e nunca geram segmento duplicado.

    Decisões arquiteturais:
        - Siglas são mantidas juntas: `DBPort` → `DB_PORT`, e não
          `D_B_PORT` como numa varredura que abre segmento em toda
          maiúscula
        - Nomes sem siglas (`PascalCase`, `camelCase`) produzem o mesmo
          resultado da varredura simples
    """
    parts = []
    start = 0

    for i, ch in enumerate(name):
        if i == 0 or not ch.isupper():
            continue
        prev = name[i - 1]
        if prev == PATH_SEPARATOR:
            continue
        nxt = name[i + 1] if i + 1 < len(name) else ""
        if not prev.isupper() or nxt.islower():
            parts.append(name[start:i])
            start = i

    parts.append(name[start:])

    return PATH_SEPARATOR.join(p.upper() for p in parts)


def join_path(prefix: str, name: str) -> str:
    """Acumula o caminho de ancestrais: `join_path("db", "port") == "db_port"`."""
    if not prefix:
        return name
    return f"{prefix}{PATH_SEPARATOR}{name}"


def derive_name(name: str, prefix: str = "") -> str:
    """Nome implícito da variável de ambiente para um campo sob `prefix`."""
    return camel_to_snake(join_path(prefix, name))
