import random

import pytest

from irqmon.cpumask import (
    CPULIST_NONE,
    cpulist_to_cpumask,
    cpumask_to_cpulist,
    parse_affinity_hint,
)


@pytest.mark.parametrize(
    "mask, want",
    [
        (0, "none"),
        (0b1, "0"),
        (0b1111, "0-3"),
        (0b10100, "2,4"),
        ((1 << 17) | (1 << 19) | (0b11 << 31) | (1 << 34), "17,19,31-32,34"),
        (0x5800A000F, "0-3,17,19,31-32,34"),
        (1 << 62, "62"),
        (1 << 63, "63"),
        ((1 << 62) | (1 << 63), "62-63"),
        ((1 << 64) - 1, "0-63"),
    ],
)
def test_cpumask_to_cpulist(mask, want):
    assert cpumask_to_cpulist(mask) == want


def test_cpumask_to_cpulist_ignores_bits_beyond_width():
    assert cpumask_to_cpulist(1 << 64) == CPULIST_NONE
    assert cpumask_to_cpulist(0b1111_0000, num_bits=6) == "4-5"


@pytest.mark.parametrize(
    "cpulist, want",
    [
        ("none", 0),
        ("", 0),
        ("0", 1),
        ("0-3", 0b1111),
        ("2,4", 0b10100),
        ("0-3,17,19,31-32,34", 0x5800A000F),
        (" 1 , 5-6 \n", 0b1100010),
    ],
)
def test_cpulist_to_cpumask(cpulist, want):
    assert cpulist_to_cpumask(cpulist) == want


@pytest.mark.parametrize("cpulist", ["a", "1-b", "3-1", "1,,2", "-1"])
def test_cpulist_to_cpumask_invalid(cpulist):
    with pytest.raises(ValueError):
        cpulist_to_cpumask(cpulist)


def test_cpumask_round_trip():
    rnd = random.Random(42)
    masks = [0, (1 << 64) - 1, 1 << 63]
    masks.extend(rnd.getrandbits(64) for _ in range(500))
    # Sparse masks, to exercise single CPU entries:
    masks.extend(
        sum(1 << cpu for cpu in {rnd.randrange(64) for _ in range(rnd.randint(1, 8))})
        for _ in range(200)
    )
    for mask in masks:
        assert cpulist_to_cpumask(cpumask_to_cpulist(mask)) == mask, hex(mask)


@pytest.mark.parametrize(
    "text, want",
    [
        ("00000000", 0),
        ("0000000f\n", 0xF),
        ("00000000,0000000f", 0xF),
        ("00000005,800a000f", 0x5800A000F),
        ("ffffffff,ffffffff,00000001", 0xFFFFFFFF00000001),
    ],
)
def test_parse_affinity_hint(text, want):
    assert parse_affinity_hint(text) == want


def test_parse_affinity_hint_invalid():
    with pytest.raises(ValueError):
        parse_affinity_hint("not-hex")
