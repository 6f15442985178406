# tests/test_cli.py
import json
import logging

import pytest

from iopole_query.cli import build, coerce_value


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        ("false", False),
        ("10", 10),
        ("-3", -3),
        ("2.5", 2.5),
        ("2024-01-01", "2024-01-01"),
        ("inf", "inf"),
        ("nan", "nan"),
        ("True", "True"),
        ("*123", "*123"),
        ("01234", "01234"),
        ("1_000", "1_000"),
        (" 10", " 10"),
        ("1e3", "1e3"),
        ("2.50", "2.50"),
    ],
)
def test_coerce_value(raw, expected):
    value = coerce_value(raw)
    assert value == expected
    assert type(value) is type(expected)


class TestBuildCommand:
    def test_match(self, capsys):
        build(match=["status=active"])
        assert capsys.readouterr().out.strip() == 'status:"active"'

    def test_match_typed_value(self, capsys):
        build(match=["count=10", "isPublished=true"])
        assert capsys.readouterr().out.strip() == "count:=10 AND isPublished:=true"

    def test_is(self, capsys):
        build(is_=["code=abc"])
        assert capsys.readouterr().out.strip() == 'code:="abc"'

    def test_where(self, capsys):
        build(where=["createdDate:>=2024-01-01", "age:<18", "name:john"])
        assert capsys.readouterr().out.strip() == (
            'createdDate:>="2024-01-01" AND age:<18 AND name:"john"'
        )

    def test_ranges(self, capsys):
        build(between=["amount=10..20"], strict_between=["date=2025-01-01..2025-01-31"])
        assert capsys.readouterr().out.strip() == (
            'amount:[10 TO 20] AND date:{"2025-01-01" TO "2025-01-31"}'
        )

    def test_logic_or(self, capsys):
        build(match=["role=admin", "role=editor"], logic="or")
        assert capsys.readouterr().out.strip() == 'role:"admin" OR role:"editor"'

    def test_logic_or_not(self, capsys):
        build(match=["a=x", "b=y"], logic="or-not")
        assert capsys.readouterr().out.strip() == 'a:"x" OR NOT b:"y"'

    def test_no_conditions(self, capsys):
        build()
        assert capsys.readouterr().out.strip() == ""

    def test_json_format(self, capsys):
        build(match=["status=active"], format="json")
        data = json.loads(capsys.readouterr().out)
        assert data["query"] == 'status:"active"'
        assert data["tree"]["children"][0]["field"] == "status"

    def test_output_file(self, tmp_path, capsys):
        path = tmp_path / "query.txt"
        build(match=["status=active"], output=path)
        assert path.read_text(encoding="utf-8") == 'status:"active"\n'
        assert "Exported query to" in capsys.readouterr().out


    def test_and_not_keeps_option_order(self, capsys):
        build(where=["amount:>100", "amount:<500"], logic="and-not")
        assert capsys.readouterr().out.strip() == "amount:>100 AND NOT amount:<500"

    def test_leading_zero_value_stays_a_string(self, capsys):
        build(match=["zip=01234"])
        assert capsys.readouterr().out.strip() == 'zip:"01234"'


class TestBuildCommandErrors:
    def test_unknown_format(self, capsys):
        with pytest.raises(SystemExit) as exc:
            build(match=["status=active"], format="xml")
        assert exc.value.code == 1
        assert "Error: Unknown format" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"match": ["status"]},
            {"is_": ["=1"]},
            {"where": ["age>=18"]},
            {"between": ["amount=10-20"]},
            {"strict_between": ["amount"]},
        ],
    )
    def test_malformed_arguments(self, kwargs, capsys):
        with pytest.raises(SystemExit) as exc:
            build(**kwargs)
        assert exc.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")

    @pytest.mark.parametrize("logic", ["and-not", "or-not"])
    def test_negated_logic_rejects_mixed_options(self, logic, capsys):
        with pytest.raises(SystemExit) as exc:
            build(where=["amount:>100"], match=["status=draft"], logic=logic)
        assert exc.value.code == 1
        assert f"Error: --logic {logic} requires" in capsys.readouterr().err

    def test_unknown_log_level(self, monkeypatch, capsys):
        monkeypatch.setenv("IOPOLE_QUERY_LOG_LEVEL", "verbose")
        with pytest.raises(SystemExit) as exc:
            build(match=["status=active"])
        assert exc.value.code == 1
        assert "Error: Unknown log level" in capsys.readouterr().err


class TestLogging:
    @pytest.fixture(autouse=True)
    def _restore_level(self):
        yield
        logging.getLogger("iopole_query").setLevel(logging.NOTSET)

    def test_log_level_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("IOPOLE_QUERY_LOG_LEVEL", "error")
        build(match=["status=active"])
        assert logging.getLogger("iopole_query").level == logging.ERROR
        assert capsys.readouterr().out.strip() == 'status:"active"'

    def test_verbose_enables_debug(self, monkeypatch, caplog):
        monkeypatch.setenv("IOPOLE_QUERY_LOG_LEVEL", "error")
        build(match=["status=active"], verbose=True)
        assert logging.getLogger("iopole_query").level == logging.DEBUG
        messages = [r.getMessage() for r in caplog.records if r.name == "iopole_query.query.builder"]
        assert 'Built query: status:"active"' in messages
