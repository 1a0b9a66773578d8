"""Tests for the command line interface."""

import pytest

from bankrec.cli.main import cli
from bankrec.domain.entities import ReconciliationStatus

from conftest import OTHER_TENANT, TENANT


@pytest.fixture
def run(cli_runner, temp_db):
    """Invoke the CLI against the temporary database as the test tenant."""

    def invoke(*args, tenant=TENANT, **kwargs):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--tenant", tenant, "--user", "maria", *args],
            **kwargs,
        )

    return invoke


def extract_id(output):
    """Extract the ID from output like "Created bank account 'X' (ID: 1)"."""
    for line in output.split("\n"):
        if "ID:" in line:
            return int(line.split("ID:")[1].strip().rstrip(")"))
    raise AssertionError(f"no ID in output: {output!r}")


def test_help(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "reconcile" in result.output
    assert "import" in result.output


def test_account_create_and_list(run):
    result = run("account", "create", "Banco do Brasil", "--number", "12345-6")
    assert result.exit_code == 0
    assert "Created bank account 'Banco do Brasil'" in result.output

    result = run("account", "list")
    assert result.exit_code == 0
    assert "Banco do Brasil" in result.output
    assert "12345-6" in result.output

    result = run("account", "list", tenant=OTHER_TENANT)
    assert "No bank accounts found." in result.output


def test_account_create_requires_name(run):
    result = run("account", "create", "  ")
    assert result.exit_code == 1
    assert "Error: Bank name is required" in result.output


def test_import_and_reconcile_workflow(run, temp_db, directory, fixtures_dir):
    """Import an OFX statement, auto-match it and resolve the rest by hand."""
    account_id = extract_id(run("account", "create", "Banco do Brasil").output)

    result = run("import", str(fixtures_dir / "statement.ofx"), "--account", str(account_id))
    assert result.exit_code == 0
    assert "Imported: 3 transactions" in result.output
    assert "Duplicates: 0" in result.output
    assert "Period: 2026-01-05 to 2026-01-20" in result.output
    assert "Auto-matched: 1" in result.output

    # A second import of the same file only finds duplicates
    result = run("import", str(fixtures_dir / "statement.ofx"), "--account", str(account_id))
    assert result.exit_code == 0
    assert "Imported: 0 transactions" in result.output
    assert "Duplicates: 3" in result.output

    result = run("reconcile", "list", "--status", "pending")
    assert result.exit_code == 0
    assert "TED RECEBIDA CLIENTE BETA" in result.output
    assert "2 pending reconciliation" in result.output

    pending = {
        t.external_id: t
        for t in temp_db.list_imported_transactions(
            TENANT, statuses=[ReconciliationStatus.PENDING]
        )
    }
    income = pending["202601100002"]
    debit = pending["202601200003"]

    result = run(
        "reconcile",
        "match",
        str(income.id),
        "contractor",
        str(directory["eletrica"]),
        "Eletricista Joaquim Pereira",
    )
    assert result.exit_code == 0
    assert "MANUAL_MATCHED" in result.output

    result = run("reconcile", "ignore", str(debit.id))
    assert result.exit_code == 0
    assert "IGNORED" in result.output

    result = run("reconcile", "list", "--status", "pending")
    assert "No transactions found." in result.output

    result = run("reconcile", "unlink", str(income.id))
    assert result.exit_code == 0
    assert "PENDING" in result.output


def test_match_unknown_entity(run, temp_db, directory, fixtures_dir):
    account_id = extract_id(run("account", "create", "Banco do Brasil").output)
    run("import", str(fixtures_dir / "statement.ofx"), "--account", str(account_id), "--no-reconcile")
    txn = temp_db.list_imported_transactions(TENANT)[0]

    result = run("reconcile", "match", str(txn.id), "supplier", "9999", "Fantasma")
    assert result.exit_code == 1
    assert "Error: Supplier 9999 not found" in result.output

    result = run("reconcile", "match", str(txn.id), "supplier", str(directory["foreign"]), "Alfa")
    assert result.exit_code == 1
    assert temp_db.get_transaction(txn.id).reconciliation_status is ReconciliationStatus.PENDING


def test_import_without_reconcile(run, directory, fixtures_dir):
    account_id = extract_id(run("account", "create", "Banco do Brasil").output)
    result = run(
        "import", str(fixtures_dir / "statement.ofx"), "--account", str(account_id), "--no-reconcile"
    )
    assert result.exit_code == 0
    assert "Auto-matched" not in result.output

    result = run("reconcile", "rerun")
    assert result.exit_code == 0
    assert "Auto-matched 1 transactions" in result.output


def test_import_errors(run, fixtures_dir, tmp_path):
    account_id = extract_id(run("account", "create", "Banco do Brasil").output)

    result = run("import", str(fixtures_dir / "statement.ofx"), "--account", "999")
    assert result.exit_code == 1
    assert "Error: Bank account 999 not found" in result.output

    pdf = tmp_path / "extrato.pdf"
    pdf.write_bytes(b"%PDF-1.4")
    result = run("import", str(pdf), "--account", str(account_id))
    assert result.exit_code == 1
    assert "Unsupported file format" in result.output

    empty = tmp_path / "empty.ofx"
    empty.write_bytes(b"<OFX></OFX>")
    result = run("import", str(empty), "--account", str(account_id))
    assert result.exit_code == 1
    assert "No transactions found" in result.output

    result = run("batches", "list")
    assert "No imports found." in result.output


def test_suggest(run, temp_db, directory, fixtures_dir):
    account_id = extract_id(run("account", "create", "Banco do Brasil").output)
    run("import", str(fixtures_dir / "statement.ofx"), "--account", str(account_id), "--no-reconcile")
    [txn] = [
        t for t in temp_db.list_imported_transactions(TENANT) if t.external_id == "202601050001"
    ]

    result = run("reconcile", "suggest", str(txn.id))
    assert result.exit_code == 0
    lines = [line for line in result.output.split("\n") if "%" in line]
    assert len(lines) == 2
    assert lines[0].startswith(" 90%")
    assert "Construtora Alfa Ltda" in lines[0]
    assert "OC 2026-001" in lines[1]

    result = run("reconcile", "suggest", str(txn.id), tenant=OTHER_TENANT)
    assert result.exit_code == 1
    assert f"Error: Transaction {txn.id} not found" in result.output


def test_batches_list_and_delete(run, temp_db, fixtures_dir):
    account_id = extract_id(run("account", "create", "Banco do Brasil").output)
    run("import", str(fixtures_dir / "statement.csv"), "--account", str(account_id))
    [batch] = temp_db.list_import_batches(TENANT)

    result = run("batches", "list")
    assert result.exit_code == 0
    assert "statement.csv" in result.output
    assert "2/2 imported" in result.output

    result = run("batches", "delete", str(batch.id), input="n\n")
    assert result.exit_code != 0
    assert len(temp_db.list_imported_transactions(TENANT)) == 2

    result = run("batches", "delete", str(batch.id), "--yes")
    assert result.exit_code == 0
    assert f"Deleted import batch {batch.id} (2 transactions)" in result.output
    assert temp_db.list_imported_transactions(TENANT) == []


def test_search(run, directory):
    result = run("reconcile", "search", "joaquim")
    assert result.exit_code == 0
    assert "Eletricista Joaquim Pereira" in result.output
    assert "11.222.333/0001-44" in result.output

    result = run("reconcile", "search", "x")
    assert "No matches." in result.output


def test_directory_commands(run):
    supplier_id = extract_id(run("directory", "add-supplier", "Votorantim", "--document", "1234").output)
    project_id = extract_id(run("directory", "add-project", "Obra Centro").output)

    result = run(
        "directory",
        "add-order",
        "--project",
        str(project_id),
        "--supplier",
        str(supplier_id),
        "--number",
        "OC-9",
        "--amount",
        "2.500,00",
        "--date",
        "10/01/2026",
    )
    assert result.exit_code == 0
    assert "Created purchase order OC-9" in result.output

    result = run("directory", "add-order", "--project", "1", "--supplier", "1",
                 "--number", "X", "--amount", "abc", "--date", "10/01/2026")
    assert result.exit_code == 1

    result = run("directory", "list")
    assert "Votorantim" in result.output
    assert "Obra Centro" in result.output
