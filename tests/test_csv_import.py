# tests/test_csv_import.py
from schooldesk.utils.csv_import import generated_email, parse_student_csv


def parse(text, **options):
    options.setdefault("last_name_placeholder", "-")
    options.setdefault("generate_email", False)
    options.setdefault("email_domain", "student.edu")
    return parse_student_csv(text, **options)


def test_rows_are_trimmed_defaulted_and_filtered():
    students = parse("Alice,Smith\nBob,\n,Jones\n", skip_header=False)

    assert students == [
        {"first_name": "Alice", "last_name": "Smith", "email": None},
        {"first_name": "Bob", "last_name": "-", "email": None},
    ]


def test_header_line_is_skipped():
    students = parse("first_name,last_name\nAlice,Smith\n")
    assert [s["first_name"] for s in students] == ["Alice"]


def test_whitespace_is_trimmed_and_email_column_kept():
    students = parse("first,last,email\n  Carol ,  Jones , carol@example.com \n")
    assert students == [{"first_name": "Carol", "last_name": "Jones", "email": "carol@example.com"}]


def test_whitespace_only_first_name_is_dropped():
    assert parse("h\n   ,Smith\n") == []


def test_placeholder_is_configurable():
    students = parse("h\nDana\n", last_name_placeholder="N/A")
    assert students[0]["last_name"] == "N/A"


def test_empty_file_yields_nothing():
    assert parse("") == []
    assert parse("first_name,last_name\n") == []


def test_emails_are_generated_only_when_enabled():
    without = parse("h\nAlice,Smith\n")
    assert without[0]["email"] is None

    generated = parse("h\nAlice,Smith\nBob,\n", generate_email=True)
    assert generated[0]["email"].startswith("alice.smith.")
    assert generated[0]["email"].endswith("@student.edu")
    assert generated[1]["email"].startswith("bob.")
    assert generated[0]["email"] != generated[1]["email"]


def test_columns_after_email_are_ignored():
    students = parse("first,last,email,grade\nAlice,Smith,a@x.org,5\nBob,Jones,,6\n")

    assert students == [
        {"first_name": "Alice", "last_name": "Smith", "email": "a@x.org"},
        {"first_name": "Bob", "last_name": "Jones", "email": None},
    ]


def test_given_email_wins_over_generated_one():
    students = parse("h\nAlice,Smith,alice@example.com\n", generate_email=True)
    assert students[0]["email"] == "alice@example.com"


def test_generated_email_format():
    assert generated_email("Mary Ann", "O'Neil", 42, "student.edu") == "maryann.oneil.42@student.edu"
    assert generated_email("Bob", "", 7, "school.org") == "bob.7@school.org"
