"""Tests for the interactive console menu."""
import pytest

from app.projekt import build_services
from app.projekt.modules.projects.models import Project
from app.projekt.shell import InputFormatError, Shell, format_project, main, parse_id


@pytest.fixture()
def services(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    for k in ("DB_MAX_RETRIES", "DB_RETRY_DELAY", "DB_MAX_RETRY_DELAY", "DB_CREATE_SCHEMA", "LOG_LEVEL"):
        monkeypatch.delenv(k, raising=False)

    services = build_services()
    yield services
    services.close()


def _run(services, *answers):
    """Run the shell over scripted answers; returns everything written."""
    it = iter(answers)
    out = []

    def read():
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    Shell(services.projects, read=read, write=out.append).run()
    return "".join(out)


def test_exit_immediately(services):
    out = _run(services, "4")
    assert "Välj alternativ:" in out
    assert "1. Lista alla projekt" in out
    assert "4. Avsluta" in out
    assert out.count("Ditt val: ") == 1


def test_invalid_choice_redisplays_menu(services):
    out = _run(services, "9", "", "4")
    assert out.count("Ogiltigt val.") == 2
    assert out.count("Välj alternativ:") == 3


def test_create_then_list(services):
    out = _run(services, "2", "Website", "Acme", "2", "App", "acme", "1", "4")
    assert out.count("Projekt skapat.") == 2
    assert "Projektlista:" in out

    projects = services.projects.get_all_projects()
    assert f"ID: {projects[0].id}, Namn: Website, Kund: Acme" in out
    assert f"ID: {projects[1].id}, Namn: App, Kund: Acme" in out
    assert len(services.customers.get_all_customers()) == 1


def test_list_empty(services):
    out = _run(services, "1", "4")
    assert "Projektlista:" in out
    assert "ID:" not in out


def test_update_project(services):
    p = services.projects.create_project("Website", "Acme")
    out = _run(services, "3", str(p.id), "Webbshop", "4")
    assert "Projekt uppdaterat." in out
    assert services.projects.get_project_by_id(p.id).name == "Webbshop"


def test_update_bad_id_is_reported_and_loop_continues(services):
    out = _run(services, "3", "abc", "1", "4")
    assert "Felaktigt ID." in out
    assert "Ange nytt projektnamn: " not in out
    assert "Projektlista:" in out


def test_update_unknown_id(services):
    out = _run(services, "3", "42", "Nytt", "4")
    assert "Projektet hittades inte." in out
    assert services.projects.get_all_projects() == []


def test_eof_ends_loop(services):
    out = _run(services, "1")
    assert out.count("Ditt val: ") == 2


def test_format_project_unknown_customer():
    p = Project(id=7, name="Website", customer_id=3)
    assert format_project(p) == "ID: 7, Namn: Website, Kund: Okänd"


@pytest.mark.parametrize("raw,expected", [("1", 1), (" 12 ", 12), ("-3", -3)])
def test_parse_id(raw, expected):
    assert parse_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1.5", None])
def test_parse_id_rejects_non_integers(raw):
    with pytest.raises(InputFormatError):
        parse_id(raw)


def test_update_out_of_range_id_is_reported_and_loop_continues(services):
    services.projects.create_project("Website", "Acme")
    out = _run(services, "3", "99999999999999999999", "1", "4")
    assert "Felaktigt ID." in out
    assert "Ange nytt projektnamn: " not in out
    assert "Namn: Website" in out


@pytest.mark.parametrize("raw", ["2147483648", "-2147483649", str(2**70)])
def test_parse_id_rejects_values_outside_int32(raw):
    with pytest.raises(InputFormatError):
        parse_id(raw)


@pytest.mark.parametrize("raw,expected", [("2147483647", 2**31 - 1), ("-2147483648", -(2**31))])
def test_parse_id_accepts_int32_bounds(raw, expected):
    assert parse_id(raw) == expected


def test_exit_prints_trailing_blank_line(services):
    out = _run(services, "4")
    assert out.endswith("Ditt val: \n\n")


def test_main_exits_1_when_database_cannot_be_opened(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'missing'/'dir'/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("DB_MAX_RETRIES", "0")
    monkeypatch.setenv("DB_CREATE_SCHEMA", "1")
    monkeypatch.setattr("app.projekt.shell.load_dotenv", lambda: None)

    with pytest.raises(SystemExit) as ei:
        main()
    assert ei.value.code == 1
