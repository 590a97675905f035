import io

from irqmon import PROG_NAME, __version__
from irqmon.cpu_stats import CpuStats
from irqmon.monitor import make_collectors, make_state, warm_up, collect_counters
from irqmon.presenter import CLEAR_SCREEN, Presenter, irq_headers, irq_rows
from testutils import write_counters, write_irq_affinity


def make_changed_state(proc_root, track=None):
    proc_root = str(proc_root)
    descriptions = {"95": "IR-PCI-MSI 1572864-edge  eth0-rx-0", "8": "IO-APIC 8-edge rtc0"}
    write_counters(proc_root, "interrupts", {"95": [10, 20], "8": [1, 1], "NMI": [0, 0]}, descriptions=descriptions)
    write_counters(proc_root, "softirqs", {"NET_RX": [5, 5, 0], "TIMER": [7, 7, 0]})
    write_irq_affinity(proc_root, "95", hint="00000000,00000002", aff="0-1")
    state = make_state(exclude=["^TIMER:"], track=track, proc_root=proc_root)
    collectors = make_collectors()
    warm_up(state, collectors)
    write_counters(proc_root, "interrupts", {"95": [12, 20], "8": [1, 1], "NMI": [0, 3]}, descriptions=descriptions)
    write_counters(proc_root, "softirqs", {"NET_RX": [5, 9, 4], "TIMER": [9, 9, 0]})
    collect_counters(state, collectors)
    return state


def test_irq_rows(tmp_path):
    state = make_changed_state(tmp_path)
    assert irq_headers(state) == ["IRQ", "CPU0", "CPU1", "Description", "Affinity"]
    assert irq_rows(state) == [
        ["95", 2, 0, "IR-PCI-MSI 1572864-edge eth0-rx-0", "hint=1,aff=0-1"],
        ["NET_RX", 0, 4, "", ""],
        ["NMI", 0, 3, "", ""],
    ]


def test_irq_rows_single_counter(tmp_path):
    proc_root = str(tmp_path)
    write_counters(proc_root, "interrupts", {"95": [1, 1]})
    with open(tmp_path / "interrupts", "at") as f:
        f.write(" ERR:          0\n")
    state = make_state(exclude=[], proc_root=proc_root)
    collectors = make_collectors()[:1]
    warm_up(state, collectors)
    with open(tmp_path / "interrupts", "at") as f:
        f.write(" MIS:          2\n")
    collect_counters(state, collectors)
    assert irq_rows(state) == [["MIS", 2, "", "", ""]]


def test_format_frame(tmp_path):
    state = make_changed_state(tmp_path, track=["eth", "NET_"])
    cpu_stats = [CpuStats(cpu="0", usr=1.5, idle=98.5), CpuStats(cpu="1", sys=3.25, idle=96.75)]
    frame = Presenter(2, clear_screen=False).format_frame(state, cpu_stats)
    lines = frame.splitlines()

    assert lines[0].startswith(f"{PROG_NAME} {__version__} - ")
    assert lines[0].endswith("interval: 2s  cpus: 2")
    assert "%usr" in frame and "%idle" in frame
    assert "98.50" in frame and "3.25" in frame

    # Changed rows only, sorted by name:
    assert "rtc0" not in frame
    assert "TIMER" not in frame
    i_95 = frame.index("eth0-rx-0")
    i_net_rx = frame.index("NET_RX")
    i_nmi = frame.index("NMI")
    assert i_95 < i_net_rx < i_nmi
    assert "hint=1,aff=0-1" in frame

    # Tracked totals, warm-up included: eth 30 + 2, NET_ 10 + 4
    eth_line = next(line for line in lines if line.startswith("eth "))
    assert eth_line.split() == ["eth", "32", "16.00", "16.00", "8.00"]
    net_line = next(line for line in lines if line.startswith("NET_ "))
    assert net_line.split() == ["NET_", "14", "7.00", "7.00", "3.50"]


def test_format_frame_no_tracked(tmp_path):
    state = make_changed_state(tmp_path)
    frame = Presenter(1, clear_screen=False).format_frame(state, [])
    assert "Tracked" not in frame


def test_render_clear_screen(tmp_path):
    state = make_changed_state(tmp_path)
    fp = io.StringIO()
    Presenter(1, clear_screen=True, fp=fp).render(state, [])
    assert fp.getvalue().startswith(CLEAR_SCREEN)

    fp = io.StringIO()
    Presenter(1, clear_screen=False, fp=fp).render(state, [])
    assert not fp.getvalue().startswith(CLEAR_SCREEN)
    assert fp.getvalue().startswith(PROG_NAME)
