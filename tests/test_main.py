import json

from src.guard_attendance.guard_attendance.main import main


def test_calc_prints_balance_json(capsys):
    code = main(["calc", "--hire-date", "2020-01-01", "--reference-date", "2024-01-02", "--used-days", "1.5"])

    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["yearsOfService"] == 4
    assert out["totalAccrued"] == 16
    assert out["totalRemaining"] == 14.5


def test_calc_reports_invalid_date_without_traceback(capsys):
    code = main(["calc", "--hire-date", "2020-02-30", "--reference-date", "2024-01-02"])

    assert code == 1
    assert "2020-02-30" in capsys.readouterr().err


def test_calc_rejects_nan_usage(capsys):
    code = main(["calc", "--hire-date", "2023-01-15", "--reference-date", "2024-06-20", "--used-days", "nan"])

    assert code == 1
    assert capsys.readouterr().out == ""
