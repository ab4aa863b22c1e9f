# src/envstruct/convert.py
"""
Conversor canônico de campos do envstruct.

Este módulo converte a string resolvida de um campo para o tipo Python
declarado na dataclass, levantando erros tipados quando a conversão falha.

Política de dispatch (v1):
    - timedelta                → gramática de duração ("5s", "1h30m", "300ms")
    - int / Int8…Int64         → inteiro decimal ou com prefixo de base
    - Unsigned / Uint8…Uint64  → inteiro sem sinal
    - float                    → float de 64 bits
    - bool                     → tokens 1/t/T/TRUE/true/True e 0/f/F/FALSE/false/False
    - str                      → atribuição literal
    - List[str]                → split por vírgula
    - qualquer outro tipo      → `UnsupportedFieldTypeError`

Decisões arquiteturais:
    - O erro da biblioteca subjacente é sempre encadeado (`raise ... from`)
    - Espaços ao redor de números não são aceitos (nenhum trimming implícito)
    - `int` sem marcador de largura é ilimitado, como no próprio Python

Invariantes:
    - Nenhuma coerção silenciosa: ou o valor é convertido, ou há erro
    - A conversão é pura (sem acesso a ambiente ou estado global)

Limites explícitos:
    - Não suporta Optional, Union ou tipos polimórficos
    - Não valida semântica de domínio do valor convertido
"""

from __future__ import annotations

import collections.abc
import math
import re
import typing
from datetime import timedelta
from typing import Any, Callable, Dict, NewType, Optional, Tuple

from .errors import (
    BoolParseError,
    DurationParseError,
    FloatParseError,
    IntegerParseError,
    UnsignedIntegerParseError,
    UnsupportedFieldTypeError,
    UnsupportedSliceKindError,
)

# ---------------------------------------------------------------------------
# Marcadores de tipo com largura de bits
# ---------------------------------------------------------------------------

Unsigned = NewType("Unsigned", int)

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)

Uint8 = NewType("Uint8", int)
Uint16 = NewType("Uint16", int)
Uint32 = NewType("Uint32", int)
Uint64 = NewType("Uint64", int)

# None = sem limite de largura
SIGNED_BITS: Dict[Any, Optional[int]] = {
    int: None,
    Int8: 8,
    Int16: 16,
    Int32: 32,
    Int64: 64,
}

UNSIGNED_BITS: Dict[Any, Optional[int]] = {
    Unsigned: None,
    Uint8: 8,
    Uint16: 16,
    Uint32: 32,
    Uint64: 64,
}

LIST_SEPARATOR = ","

_TRUE_TOKENS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TOKENS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


# ---------------------------------------------------------------------------
# Duração
# ---------------------------------------------------------------------------

_NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # µ (micro sign)
    "μs": 1_000,  # μ (letra grega mu)
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_DURATION_ITEM = re.compile(r"(\d*)(?:\.(\d*))?(ns|us|µs|μs|ms|s|m|h)?")

_MAX_DURATION_NANOS = 2**63 - 1


def parse_duration(s: str) -> timedelta:
    """
    Converte uma string de duração para `timedelta`.

    Gramática: sinal opcional seguido de uma ou mais unidades
    `<decimal><unidade>`, com unidades `ns, us, µs, ms, s, m, h`
    (ex.: "300ms", "-1.5h", "2h45m"). "0" sozinho é aceito.

    Precisão: o resultado é truncado para microssegundos (resolução do
    `timedelta`); o total deve caber em 2**63-1 nanossegundos.

    Raises:
        ValueError: Se a string não seguir a gramática.
    """
    orig = s
    neg = False
    if s and s[0] in "+-":
        neg = s[0] == "-"
        s = s[1:]

    if s == "0":
        return timedelta(0)
    if not s:
        raise ValueError(f'invalid duration "{orig}"')

    total = 0
    pos = 0
    while pos < len(s):
        m = _DURATION_ITEM.match(s, pos)
        whole, frac, unit = m.group(1), m.group(2), m.group(3)
        if not whole and not frac:
            raise ValueError(f'invalid duration "{orig}"')
        if unit is None:
            raise ValueError(f'missing unit in duration "{orig}"')

        scale = _NANOS_PER_UNIT[unit]
        nanos = int(whole or "0") * scale
        if frac:
            nanos += int(frac) * scale // 10 ** len(frac)
        total += nanos
        if total > _MAX_DURATION_NANOS:
            raise ValueError(f'invalid duration "{orig}"')
        pos = m.end()

    micros = total // 1_000
    return timedelta(microseconds=-micros if neg else micros)


# ---------------------------------------------------------------------------
# Números e booleanos
# ---------------------------------------------------------------------------

def _split_sign(s: str) -> Tuple[str, str]:
    if s[:1] in ("+", "-"):
        return s[0], s[1:]
    return "", s


def _parse_magnitude(s: str, body: str) -> int:
    if not body or body != body.strip() or body[0] in "+-":
        raise ValueError(f'invalid syntax: "{s}"')
    # "017" é octal legado; Python rejeita esse formato em int(x, 0)
    if len(body) > 1 and body[0] == "0" and (body[1].isdigit() or body[1] == "_"):
        return int(body, 8)
    return int(body, 0)


def parse_int(s: str, bits: Optional[int] = None) -> int:
    """Inteiro com sinal, decimal ou com prefixo `0x`, `0o`, `0b` ou `0`."""
    sign, body = _split_sign(s)
    val = _parse_magnitude(s, body)
    if sign == "-":
        val = -val
    if bits is not None and not -(1 << (bits - 1)) <= val <= (1 << (bits - 1)) - 1:
        raise ValueError(f'value out of range: "{s}"')
    return val


def parse_uint(s: str, bits: Optional[int] = None) -> int:
    """Inteiro sem sinal (nenhum `+`/`-` é aceito)."""
    sign, body = _split_sign(s)
    if sign:
        raise ValueError(f'invalid syntax: "{s}"')
    val = _parse_magnitude(s, body)
    if bits is not None and val >= 1 << bits:
        raise ValueError(f'value out of range: "{s}"')
    return val


def parse_float(s: str) -> float:
    if not s or s != s.strip():
        raise ValueError(f'invalid syntax: "{s}"')
    val = float(s)
    if math.isinf(val) and "inf" not in s.lower():
        raise ValueError(f'value out of range: "{s}"')
    return val


def parse_bool(s: str) -> bool:
    if s in _TRUE_TOKENS:
        return True
    if s in _FALSE_TOKENS:
        return False
    raise ValueError(f'invalid syntax: "{s}"')


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def type_name(hint: Any) -> str:
    """Nome legível de um tipo declarado, para mensagens de erro."""
    name = getattr(hint, "__name__", None)
    if isinstance(name, str) and typing.get_origin(hint) is None:
        return name
    return repr(hint).replace("typing.", "")


def _is_list_hint(hint: Any) -> bool:
    origin = typing.get_origin(hint)
    return origin in (list, collections.abc.Sequence, collections.abc.MutableSequence)


def _convert_list(raw: str) -> list:
    if raw == "":
        return []
    return raw.split(LIST_SEPARATOR)


def _wrap(
    parse: Callable[[str], Any],
    error_cls: type,
    raw: str,
    field: Optional[str],
) -> Any:
    try:
        return parse(raw)
    except ValueError as exc:
        raise error_cls(exc, value=raw, field=field) from exc


def ensure_supported(hint: Any, *, field: Optional[str] = None) -> None:
    """
    Valida estruturalmente o tipo declarado, sem olhar para valores.

    O walker chama esta função antes de resolver o valor, de modo que um
    registro incompatível falha da mesma forma em qualquer ambiente.

    Raises:
        UnsupportedSliceKindError: Lista com elementos diferentes de `str`.
        UnsupportedFieldTypeError: Tipo fora da política de dispatch.
    """
    if _is_list_hint(hint):
        args = typing.get_args(hint)
        if not args or args[0] is not str:
            raise UnsupportedSliceKindError(type_name(args[0]) if args else "Any", field=field)
        return

    if hint in (timedelta, float, bool, str) or hint in SIGNED_BITS or hint in UNSIGNED_BITS:
        return

    raise UnsupportedFieldTypeError(type_name(hint), field=field)


def convert(hint: Any, raw: str, *, field: Optional[str] = None) -> Any:
    """
    Converte a string resolvida para o tipo declarado do campo.

    Args:
        hint: Tipo declarado (resolvido via `typing.get_type_hints`).
        raw (str): Valor bruto resolvido.
        field: Identificador do campo, anexado aos erros.

    Returns:
        Any: Valor convertido, pronto para atribuição.

    Raises:
        DurationParseError, IntegerParseError, UnsignedIntegerParseError,
        FloatParseError, BoolParseError: Falha de conversão (com `__cause__`).
        UnsupportedSliceKindError: Lista com elementos diferentes de `str`.
        UnsupportedFieldTypeError: Qualquer outro tipo não suportado.
    """
    ensure_supported(hint, field=field)

    if hint is timedelta:
        return _wrap(parse_duration, DurationParseError, raw, field)

    if hint is bool:
        return _wrap(parse_bool, BoolParseError, raw, field)

    if hint in SIGNED_BITS:
        bits = SIGNED_BITS[hint]
        return _wrap(lambda s: parse_int(s, bits), IntegerParseError, raw, field)

    if hint in UNSIGNED_BITS:
        bits = UNSIGNED_BITS[hint]
        return _wrap(lambda s: parse_uint(s, bits), UnsignedIntegerParseError, raw, field)

    if hint is float:
        return _wrap(parse_float, FloatParseError, raw, field)

    if hint is str:
        return raw

    return _convert_list(raw)
