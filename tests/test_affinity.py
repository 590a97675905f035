import pytest

from irqmon.affinity import (
    AffinityInfo,
    get_affinity_hint,
    get_affinity_info,
    get_smp_affinity_list,
)
from testutils import proc_testdata_root, write_irq_affinity


def test_affinity_testdata():
    assert str(get_affinity_info("95", proc_root=proc_testdata_root)) == "hint=0-3,aff=0-3"
    assert (
        str(get_affinity_info("96", proc_root=proc_testdata_root))
        == "hint=0-3,17,19,31-32,34,aff=none"
    )
    assert str(get_affinity_info("0", proc_root=proc_testdata_root)) == "hint=none,aff=1"


def test_affinity_missing_irq_dir(tmp_path):
    info = get_affinity_info("42", proc_root=str(tmp_path))
    assert info == AffinityInfo(hint="none", aff="none")


def test_affinity_zero_and_empty(tmp_path):
    write_irq_affinity(str(tmp_path), "42", hint="00000000,00000000", aff="")
    assert get_affinity_hint("42", proc_root=str(tmp_path)) == "none"
    assert get_smp_affinity_list("42", proc_root=str(tmp_path)) == "none"


def test_affinity_invalid_hint(tmp_path):
    write_irq_affinity(str(tmp_path), "42", hint="garbage", aff="2-3")
    assert str(get_affinity_info("42", proc_root=str(tmp_path))) == "hint=none,aff=2-3"


def test_affinity_symbolic_name():
    with pytest.raises(ValueError):
        get_affinity_info("NMI", proc_root=proc_testdata_root)
