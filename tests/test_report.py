import csv

from conftest import grid_from
from tierpath.report import format_report, format_summary, write_csv
from tierpath.sequencer import plan


def test_report_matches_console_format():
    grid = grid_from("S..", ".#.", "...")
    tour = plan(grid, (0, 0), [((0, 2), 2), ((1, 1), 1), ((0, 1), 1)])
    text = format_report(tour)
    lines = text.splitlines()
    assert lines[:5] == [
        "Sorted Addresses:",
        "(1, 1) with priority 1",
        "(0, 1) with priority 1",
        "(0, 2) with priority 2",
        "",
    ]
    assert lines[5] == "Cannot find a path to destination (1, 1) with priority 1."
    assert lines[6:9] == ["Optimal Path to destination (0, 1) with priority 1:", "(0, 0)", "(0, 1)"]
    assert lines[9:12] == ["Optimal Path to destination (0, 2) with priority 2:", "(0, 1)", "(0, 2)"]
    assert lines[-1] == "All done!"
    assert text.endswith("\n")


def test_summary(open3):
    tour = plan(open3, (0, 0), [((2, 2), 1), ((0, 0), 2), ((0, 9), 3)])
    summary = format_summary(tour)
    lines = summary.splitlines()
    assert len(lines) == 4
    assert "reached" in lines[0] and "steps=    4" in lines[0]
    assert "out_of_bounds" in lines[2] and "steps=    -" in lines[2]
    assert lines[-1].startswith("reached 2/3 | total steps 8 | final position (0, 0)")


def test_summary_mentions_dropped(open3):
    tour = plan(open3, (0, 0), [((2, 2), 9)])
    assert "dropped 1 request(s)" in format_summary(tour)


def test_write_csv(tmp_path, walled3):
    tour = plan(walled3, (0, 0), [((2, 2), 1), ((1, 1), 2)])
    out = tmp_path / "csv" / "visits.csv"
    write_csv(tour, str(out))
    with open(out, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["status"] for r in rows] == ["reached", "unreachable"]
    assert rows[0]["steps"] == "4"
    assert rows[1]["steps"] == ""
    assert (rows[1]["origin_row"], rows[1]["origin_col"]) == ("2", "2")
