import pytest

from models.transaction import TransactionDraft
from utils.errors import PersistenceError


def _draft(description="Café", type_="expense", date="2024-05-01", value=10.0):
    return TransactionDraft(description=description, value=value, type=type_,
                            category_id=1, date=date)


def test_create_batch_returns_rows_in_order(tx_dao):
    drafts = [_draft(f"Item ({k}/3)", date=f"2024-0{k}-01") for k in (1, 2, 3)]
    created = tx_dao.create_batch("alice", drafts)
    assert [tx.description for tx in created] == ["Item (1/3)", "Item (2/3)", "Item (3/3)"]
    assert created[0].id < created[1].id < created[2].id
    assert all(tx.user_id == "alice" for tx in created)


def test_failed_batch_leaves_nothing_behind(tx_dao):
    drafts = [_draft("A"), _draft("B"), _draft("C", type_="transfer")]
    with pytest.raises(PersistenceError):
        tx_dao.create_batch("alice", drafts)
    assert tx_dao.count("alice") == 0


def test_failed_batch_keeps_earlier_writes(tx_dao):
    tx_dao.create("alice", _draft("Existing"))
    with pytest.raises(PersistenceError):
        tx_dao.create_batch("alice", [_draft("New"), _draft("Bad", value=-1)])
    assert [tx.description for tx in tx_dao.query("alice")] == ["Existing"]


def test_description_range_query(tx_dao):
    for desc in ("Notebook (1/12)", "Notebook (10/12)", "Notebook (2/12)",
                 "Notebook extra", "Notebooks (1/2)", "Mesa (1/2)"):
        tx_dao.create("alice", _draft(desc))

    rows = tx_dao.query("alice", description_from="Notebook (", description_before="Notebook )")

    assert sorted(tx.description for tx in rows) == [
        "Notebook (1/12)", "Notebook (10/12)", "Notebook (2/12)",
    ]


def test_query_orders_by_date(tx_dao):
    tx_dao.create("alice", _draft("mid", date="2024-02-01"))
    tx_dao.create("alice", _draft("old", date="2024-01-01"))
    tx_dao.create("alice", _draft("new", date="2024-03-01"))

    assert [tx.description for tx in tx_dao.query("alice")] == ["new", "mid", "old"]
    assert [tx.description for tx in tx_dao.query("alice", order_desc=False)] == ["old", "mid", "new"]
    assert [tx.description for tx in tx_dao.query("alice", date_from="2024-02-01", date_to="2024-02-29")] == ["mid"]


def test_delete_batch_is_scoped_to_user(tx_dao):
    mine = tx_dao.create("alice", _draft())
    theirs = tx_dao.create("bob", _draft())

    assert tx_dao.delete_batch("alice", [mine.id, theirs.id]) == 1
    assert tx_dao.count("alice") == 0
    assert tx_dao.count("bob") == 1


def test_delete_batch_empty(tx_dao):
    assert tx_dao.delete_batch("alice", []) == 0


def test_joined_category_fields(tx_dao, category_dao):
    cat = category_dao.create("alice", "Lazer", "#FF6347")
    tx = tx_dao.create("alice", TransactionDraft("Cinema", 30.0, "expense", cat.id, "2024-05-02"))
    assert (tx.category_name, tx.category_color) == ("Lazer", "#FF6347")

    category_dao.delete("alice", cat.id)
    orphan = tx_dao.get_by_id("alice", tx.id)
    assert orphan.category_id == cat.id
    assert orphan.category_name == ""


def test_single_create_and_delete(tx_dao):
    tx = tx_dao.create("alice", _draft("Padaria"))
    assert tx_dao.get_by_id("alice", tx.id).description == "Padaria"
    assert tx_dao.get_by_id("bob", tx.id) is None

    assert tx_dao.delete("alice", tx.id) == 1
    assert tx_dao.delete("alice", tx.id) == 0


def test_failed_delete_batch_restores_every_row(tx_dao, db):
    rows = tx_dao.create_batch("alice", [_draft(f"Item ({k}/3)") for k in (1, 2, 3)])
    with db.transaction() as conn:
        conn.execute(
            "CREATE TRIGGER keep_last BEFORE DELETE ON transactions "
            f"WHEN OLD.id = {rows[-1].id} "
            "BEGIN SELECT RAISE(ABORT, 'record is locked'); END"
        )

    with pytest.raises(PersistenceError):
        tx_dao.delete_batch("alice", [tx.id for tx in rows])

    assert tx_dao.count("alice") == 3
