import json
from unittest.mock import patch

import pytest

from hr_docgen.cli.draft import run
from hr_docgen.gate import VALIDATION_MESSAGE
from hr_docgen.store import OFFER_KEY, PAYSLIP_KEY


def scripted_answers(answers):
    """Fake ask_input/ask_choice: pops queued answers per label, else keeps the shown default."""
    asked = []

    def fake(prompt_text, *args, default=None, **kwargs):
        asked.append(prompt_text)
        queue = answers.get(prompt_text)
        if queue:
            return queue.pop(0)
        return default or ""

    return fake, asked


def show_json(kind, store_dir, capsys):
    capsys.readouterr()
    assert run(kind, ["--store-dir", str(store_dir), "show", "--json"]) == 0
    return json.loads(capsys.readouterr().out)


@pytest.mark.e2e
def test_set_and_show_offer(tmp_path, capsys):
    code = run("offer", ["--store-dir", str(tmp_path), "set", "candidate_name=Meera Nair", "offer.ctc=600000"])
    assert code == 0
    assert (tmp_path / f"{OFFER_KEY}.json").exists()

    payload = show_json("offer", tmp_path, capsys)

    assert payload["key"] == OFFER_KEY
    assert payload["title"] == "Offer_Letter_Meera_Nair"
    assert payload["draft"]["candidateName"] == "Meera Nair"
    assert payload["draft"]["ctc"] == "600000"
    assert payload["draft"]["designation"] == "Trainee App Developer"


@pytest.mark.e2e
def test_set_payslip_reports_totals(tmp_path, capsys):
    code = run(
        "payslip",
        [
            "--store-dir",
            str(tmp_path),
            "set",
            "employee.name=Asha Rao",
            "earnings.basic=30000",
            "earnings.hra=12000",
            "deductions.pf=1800",
        ],
    )
    assert code == 0

    payload = show_json("payslip", tmp_path, capsys)

    assert payload["draft"]["employee"]["empName"] == "Asha Rao"
    assert payload["totals"] == {"gross": 42000.0, "total_deductions": 1800.0, "net": 40200.0}
    assert payload["amount_in_words"] == "Forty Thousand Two Hundred"


@pytest.mark.e2e
def test_show_table(tmp_path, capsys):
    run("payslip", ["--store-dir", str(tmp_path), "set", "earnings.basic=25000"])
    capsys.readouterr()

    assert run("payslip", ["--store-dir", str(tmp_path), "show"]) == 0

    out = capsys.readouterr().out
    assert "Basic Salary" in out
    assert "Amount in words: Twenty Five Thousand" in out


@pytest.mark.e2e
@pytest.mark.parametrize(
    "kind, assignment",
    [
        ("offer", "offer.salary=1"),
        ("offer", "employee.name=Asha"),
        ("payslip", "name=Asha"),
        ("payslip", "earnings.basic"),
    ],
)
def test_bad_assignment_returns_usage_error(tmp_path, capsys, kind, assignment):
    assert run(kind, ["--store-dir", str(tmp_path), "set", assignment]) == 2
    assert "ERROR:" in capsys.readouterr().out


@pytest.mark.e2e
def test_reset_with_yes_clears_saved_draft(tmp_path):
    run("offer", ["--store-dir", str(tmp_path), "set", "candidate_name=Meera Nair"])

    assert run("offer", ["--store-dir", str(tmp_path), "reset", "--yes"]) == 0

    assert not (tmp_path / f"{OFFER_KEY}.json").exists()


@pytest.mark.e2e
def test_reset_cancelled_keeps_saved_draft(tmp_path):
    run("offer", ["--store-dir", str(tmp_path), "set", "candidate_name=Meera Nair"])

    with patch("hr_docgen.utils.console.ask_confirm", return_value=False) as mock_confirm:
        assert run("offer", ["--store-dir", str(tmp_path), "reset"]) == 1

    assert mock_confirm.call_args[0][0] == "Are you sure you want to clear all data? This cannot be undone."
    assert (tmp_path / f"{OFFER_KEY}.json").exists()


@pytest.mark.e2e
def test_export_writes_pdf(tmp_path, capsys):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"company_name": "Acme Labs"}), encoding="utf-8")
    out = tmp_path / "slip.pdf"

    code = run("payslip", ["--store-dir", str(tmp_path), "--settings", str(settings), "export", "--out", str(out)])

    assert code == 0
    assert out.read_bytes().startswith(b"%PDF")
    assert "Some required fields are empty" in capsys.readouterr().out


@pytest.mark.e2e
def test_invalid_settings_returns_error(tmp_path, capsys):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"company": "typo"}), encoding="utf-8")

    assert run("offer", ["--store-dir", str(tmp_path), "--settings", str(settings), "show"]) == 2
    assert "Invalid settings" in capsys.readouterr().out


@pytest.mark.e2e
def test_fill_requires_terminal(tmp_path):
    with patch("hr_docgen.utils.console.is_interactive", return_value=False):
        assert run("offer", ["--store-dir", str(tmp_path), "fill"]) == 2


@pytest.mark.e2e
def test_fill_wizard_repeats_blocked_section(tmp_path, capsys):
    fake_input, asked = scripted_answers(
        {
            "Full Name": ["", "Meera Nair"],
            "Annual CTC (₹)": ["600000"],
            "Offer Expiry Date": ["2026-04-30"],
        }
    )

    with (
        patch("hr_docgen.utils.console.is_interactive", return_value=True),
        patch("hr_docgen.utils.console.ask_input", side_effect=fake_input),
    ):
        assert run("offer", ["--store-dir", str(tmp_path), "fill"]) == 0

    out = capsys.readouterr().out
    assert VALIDATION_MESSAGE in out
    assert "Final Summary" in out
    assert asked.count("Full Name") == 2

    payload = show_json("offer", tmp_path, capsys)
    assert payload["draft"]["candidateName"] == "Meera Nair"
    assert payload["draft"]["ctc"] == "600000"
    assert payload["draft"]["expiryDate"] == "2026-04-30"


@pytest.mark.e2e
def test_fill_wizard_payslip(tmp_path, capsys):
    answers = {
        "Employee Name": ["Asha Rao"],
        "Employee ID": ["AG-001"],
        "Date of Joining": ["2024-08-06"],
        "Paid Days": ["31"],
        "Department": ["Engineering"],
        "Designation": ["App Developer"],
        "Bank Name": ["HDFC Bank"],
        "Account Number": ["1234567890"],
        "PAN Number": ["ABCDE1234F"],
        "Basic Salary": ["30000"],
        "Provident Fund (PF)": ["1800"],
    }
    fake_input, asked = scripted_answers(answers)
    fake_choice, _ = scripted_answers({"Month": ["March"]})

    with (
        patch("hr_docgen.utils.console.is_interactive", return_value=True),
        patch("hr_docgen.utils.console.ask_input", side_effect=fake_input),
        patch("hr_docgen.utils.console.ask_choice", side_effect=fake_choice),
    ):
        assert run("payslip", ["--store-dir", str(tmp_path), "fill"]) == 0

    assert "Basic Salary" in asked
    payload = show_json("payslip", tmp_path, capsys)
    assert payload["draft"]["employee"]["month"] == "March"
    assert payload["draft"]["employee"]["pan"] == "ABCDE1234F"
    assert payload["totals"]["net"] == 28200.0
    assert (tmp_path / f"{PAYSLIP_KEY}.json").exists()


@pytest.mark.e2e
def test_show_and_export_with_net_beyond_words_range(tmp_path, capsys):
    assert run("payslip", ["--store-dir", str(tmp_path), "set", "earnings.basic=2000000000"]) == 0

    payload = show_json("payslip", tmp_path, capsys)
    assert payload["totals"]["net"] == 2000000000.0
    assert payload["amount_in_words"] == ""

    out = tmp_path / "slip.pdf"
    assert run("payslip", ["--store-dir", str(tmp_path), "export", "--out", str(out)]) == 0
    assert out.read_bytes().startswith(b"%PDF")
