# tests/convert/test_duration.py
"""
Testes da gramática de duração (parse_duration).

Gramática: sinal opcional seguido de uma ou mais unidades
`<decimal><unidade>` (ns, us, µs, ms, s, m, h); "0" sozinho é aceito.
"""

from datetime import timedelta

import pytest

from envstruct.convert import parse_duration


@pytest.mark.parametrize(
    "raw, want",
    [
        ("0", timedelta(0)),
        ("-0", timedelta(0)),
        ("5s", timedelta(seconds=5)),
        ("+5s", timedelta(seconds=5)),
        ("1h", timedelta(hours=1)),
        ("2h45m", timedelta(hours=2, minutes=45)),
        ("1h30m15s", timedelta(hours=1, minutes=30, seconds=15)),
        ("300ms", timedelta(milliseconds=300)),
        ("1.5h", timedelta(minutes=90)),
        (".5s", timedelta(milliseconds=500)),
        ("1.s", timedelta(seconds=1)),
        ("-1.5m", -timedelta(seconds=90)),
        ("250us", timedelta(microseconds=250)),
        ("250µs", timedelta(microseconds=250)),
        ("250μs", timedelta(microseconds=250)),
        ("1500ns", timedelta(microseconds=1)),
        ("1m0.5s", timedelta(minutes=1, milliseconds=500)),
    ],
)
def test_valid_durations(raw, want):
    assert parse_duration(raw) == want


@pytest.mark.parametrize(
    "raw",
    ["", "invalid", "5", "s", ".s", "1hh", "1h-5m", " 5s", "5s ", "1d", "+", "9999999999h"],
)
def test_invalid_durations(raw):
    """Verifica que entradas fora da gramática levantam ValueError."""
    with pytest.raises(ValueError, match="duration"):
        parse_duration(raw)
