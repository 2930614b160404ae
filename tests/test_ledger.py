import uuid
from datetime import UTC, datetime

from nutrition_engine.domain.nutrition import MacroProfile
from nutrition_engine.services.ledger import MealLedger, total_snapshots
from tests.conftest import DAY, SESSION_ID, make_entry

RICE_PORTION = MacroProfile(calories=195, protein_g=4.1, carbs_g=42.0, fat_g=0.5)
DAL_PORTION = MacroProfile(calories=232, protein_g=18.0, carbs_g=40.0, fat_g=0.8)


def _ledger() -> MealLedger:
    return MealLedger(session_id=SESSION_ID, date=DAY)


def test_add_entry_appends_in_order_without_mutating() -> None:
    empty = _ledger()
    first, rice = empty.add_entry("fdc:169756", "Rice", 1, "medium portion (150g)", RICE_PORTION)
    second, dal = first.add_entry("fdc:172421", "Dal", 1, "medium bowl (200g)", DAL_PORTION)

    assert empty.entries == ()
    assert [entry.food_name_snapshot for entry in second.entries] == ["Rice", "Dal"]
    assert second.get(dal.id) == dal
    assert second.get(rice.id) == rice
    assert dal.nutrient_snapshot == DAL_PORTION


def test_add_entry_generates_unique_ids_and_timestamps() -> None:
    ledger, first = _ledger().add_entry(None, "Tea", 1, "cup", RICE_PORTION)
    _, second = ledger.add_entry(None, "Tea", 1, "cup", RICE_PORTION)

    assert first.id != second.id
    assert uuid.UUID(first.id)
    assert first.added_at.tzinfo is not None


def test_add_entry_keeps_supplied_id_and_time() -> None:
    added_at = datetime(2025, 7, 7, 8, 30, tzinfo=UTC)
    _, entry = _ledger().add_entry(
        None, "Tea", 1, "cup", RICE_PORTION, entry_id="meal-1", added_at=added_at
    )
    assert entry.id == "meal-1"
    assert entry.added_at == added_at


def test_remove_entry() -> None:
    ledger = MealLedger(
        session_id=SESSION_ID,
        date=DAY,
        entries=(make_entry("a", 100), make_entry("b", 200)),
    )
    removal = ledger.remove_entry("a")

    assert removal.removed is True
    assert [entry.id for entry in removal.ledger.entries] == ["b"]
    assert len(ledger.entries) == 2


def test_remove_missing_entry_is_a_no_op() -> None:
    ledger = MealLedger(session_id=SESSION_ID, date=DAY, entries=(make_entry("a", 100),))
    removal = ledger.remove_entry("missing")

    assert removal.removed is False
    assert removal.ledger == ledger


def test_totals_are_rounded_sums() -> None:
    entries = (
        make_entry("a", 100.4, protein_g=1.04),
        make_entry("b", 100.4, protein_g=1.04),
    )
    ledger = MealLedger(session_id=SESSION_ID, date=DAY, entries=entries)

    assert ledger.totals() == MacroProfile(calories=201, protein_g=2.1, carbs_g=0, fat_g=0)
    assert total_snapshots(()) == MacroProfile(calories=0, protein_g=0, carbs_g=0, fat_g=0)
