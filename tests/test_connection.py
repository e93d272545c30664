from coa.database import get_db, load_accounts, load_store, save_account, save_accounts
from coa.models import Account, Currency


def test_connection_commit(tmp_path):
    db_path = tmp_path / "coa.db"
    with get_db(str(db_path)) as conn:
        save_account(conn, Account(code="10", description="Efectivo"))

    with get_db(str(db_path)) as conn:
        accounts = load_accounts(conn)
        assert [a.code for a in accounts] == ["10"]


def test_connection_rollback(tmp_path):
    db_path = tmp_path / "coa.db"
    try:
        with get_db(str(db_path)) as conn:
            save_account(conn, Account(code="10", description="Efectivo"))
            raise RuntimeError("force rollback")
    except RuntimeError:
        pass

    with get_db(str(db_path)) as conn:
        assert load_accounts(conn) == []


def test_save_account_upserts(tmp_path):
    db_path = tmp_path / "coa.db"
    account = Account(code="1011", description="Caja", currency="ME")
    with get_db(str(db_path)) as conn:
        save_account(conn, account)
        account.description = "Caja Principal"
        account.active = False
        save_account(conn, account)

    with get_db(str(db_path)) as conn:
        (loaded,) = load_accounts(conn)
    assert loaded.description == "Caja Principal"
    assert loaded.active is False
    assert loaded.currency == Currency.FOREIGN
    assert loaded.level == 4


def test_scopes_are_separate(tmp_path):
    db_path = tmp_path / "coa.db"
    with get_db(str(db_path)) as conn:
        save_accounts(conn, [Account(code="1", description="A")], scope="empresa-a")
        save_accounts(conn, [Account(code="2", description="B")], scope="empresa-b")

    with get_db(str(db_path)) as conn:
        store = load_store(conn, "empresa-a")
    assert store.scope == "empresa-a"
    assert store.codes() == ["1"]


def test_get_db_creates_missing_directories(tmp_path):
    db_path = tmp_path / "data" / "empresa" / "coa.db"
    with get_db(db_path) as conn:
        save_account(conn, Account(code="1", description="ACTIVO"))
    assert db_path.exists()
