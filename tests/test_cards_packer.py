import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from core.layout.cards_packer import CardsPacker, apply_size_class
from core.models.schema import Card


@pytest.fixture
def cards():
    return [
        Card(id="hero", size=2, class_name="news__card"),
        Card(id="a", size=1),
        Card(id="b", size=1),
        Card(id="c", size=1),
        Card(id="d", size=1),
    ]


@pytest.fixture
def packer(cards):
    return CardsPacker(cards, cards_width=100, cards_ratio=0.75)


def test_first_update_lays_out_cards(packer):
    assert packer.update(400) is True
    assert packer.cards_per_line == 4
    assert packer.lines_amount == 2
    assert packer.list_height == 150

    hero = packer.styles["hero"]
    assert (hero.width, hero.height, hero.left, hero.top) == ("50%", "100%", "0%", "0%")
    assert hero.class_name == "news__card news__cardSize-2"
    assert hero.visibility == ""

    d = packer.styles["d"]
    assert (d.width, d.height, d.left, d.top) == ("25%", "50%", "75%", "50%")
    assert d.class_name == ""


def test_same_width_is_not_recalculated(packer):
    packer.update(400)
    assert packer.update(400) is False
    assert packer.list_height == 150


def test_same_cards_per_line_only_rescales_height(packer):
    packer.update(400)
    styles = packer.styles

    assert packer.update(410) is False
    assert packer.styles == styles
    assert packer.list_height == 154


def test_more_cards_per_line_relayouts(packer):
    packer.update(400)
    assert packer.update(600) is True

    assert packer.cards_per_line == 6
    assert packer.lines_amount == 2
    assert packer.styles["d"].left.startswith("83.33")
    assert packer.styles["a"].width.startswith("16.66")


def test_narrow_list_keeps_at_least_one_card_per_line(packer):
    packer.update(10)

    assert packer.cards_per_line == 1
    # hero is clamped to a single slot, so every card takes one row
    assert packer.lines_amount == 5
    assert packer.styles["hero"].class_name == "news__card"
    assert packer.styles["d"].top == "80%"


def test_cards_over_row_limit_are_hidden():
    cards = [Card(id=str(i), size=1) for i in range(5)]
    packer = CardsPacker(cards, cards_width=100, cards_ratio=1, max_rows_amount=2)
    packer.update(200)

    hidden = packer.styles["4"]
    assert hidden.visibility == "hidden"
    assert hidden.z_index == -1
    assert (hidden.width, hidden.height, hidden.left, hidden.top) == ("0", "0", "0", "0")
    assert packer.styles["3"].visibility == ""
    assert packer.list_height == 200


def test_hidden_cards_are_left_out(cards):
    cards[1] = Card(id="a", size=1, hidden=True)
    packer = CardsPacker(cards, cards_width=100, cards_ratio=0.75)
    packer.update(400)

    assert "a" not in packer.styles
    assert packer.styles["d"].left == "50%"


def test_ratio_change_keeps_placements(packer):
    packer.update(400)
    styles = packer.styles

    packer.set_cards_ratio(1.0)
    assert packer.update(400) is False
    assert packer.styles == styles
    assert packer.list_height == 200


def test_cards_width_change_relayouts(packer):
    packer.update(400)
    packer.set_cards_width(200)

    assert packer.update(400) is True
    assert packer.cards_per_line == 2
    assert packer.lines_amount == 4


def test_row_limit_change_relayouts(packer):
    packer.update(400)
    packer.set_max_rows_amount(1.2)

    assert packer.max_rows_amount == 1
    assert packer.update(400) is True
    assert packer.styles["hero"].visibility == "hidden"
    # hidden cards keep the size class they had
    assert packer.styles["hero"].class_name == "news__card news__cardSize-2"
    assert packer.styles["a"].left == "0%"
    assert packer.lines_amount == 1


def test_non_numeric_row_limit_is_unbounded(cards):
    packer = CardsPacker(cards, cards_width=100, cards_ratio=1, max_rows_amount="3")
    assert packer.max_rows_amount is None


def test_settings_are_clamped(cards):
    packer = CardsPacker(cards, cards_width=0, cards_ratio=-1, card_size_class_prefix="")

    assert packer.cards_width == 1
    assert packer.cards_ratio == 0
    assert packer.card_size_class_prefix == "news__cardSize-"


def test_init_reloads_cards(packer):
    packer.update(400)
    packer.init([Card(id="solo", size=3)])

    assert packer.cards_per_line is None
    assert packer.update(400) is True
    assert list(packer.styles) == ["solo"]
    assert packer.styles["solo"].class_name == "news__cardSize-2"


def test_destroy_forgets_geometry(packer):
    packer.update(400)
    packer.destroy()

    assert packer.list_height is None
    assert packer.lines_amount is None
    assert packer.styles["a"].width == ""
    assert packer.styles["hero"].class_name == "news__card news__cardSize-2"


def test_result_snapshot(packer):
    packer.update(400)
    result = packer.result()

    assert result.cards_per_line == 4
    assert result.lines_amount == 2
    assert result.list_height == 150
    assert set(result.styles) == {"hero", "a", "b", "c", "d"}


def test_apply_size_class_replaces_old_size():
    assert apply_size_class("card news__cardSize-3", "news__cardSize-", 2) == "card news__cardSize-2"
    assert apply_size_class("card news__cardSize-3", "news__cardSize-", 1) == "card"
    assert apply_size_class("", "p-", 4) == "p-4"


def test_duplicate_ids_are_rejected():
    with pytest.raises(ValueError, match="unique"):
        CardsPacker([Card(id="x"), Card(id="x")], cards_width=100, cards_ratio=1)


def test_card_shown_again_comes_back_on_init():
    a = Card(id="a", size=1, hidden=True)
    b = Card(id="b", size=1)
    packer = CardsPacker([a, b], cards_width=100, cards_ratio=1)
    packer.update(200)
    assert list(packer.styles) == ["b"]

    a.hidden = False
    packer.init()

    assert packer.update(200) is True
    assert list(packer.styles) == ["a", "b"]
    assert packer.styles["a"].left == "0%"
    assert packer.styles["b"].left == "50%"


def test_card_hidden_later_drops_out_on_init(cards):
    packer = CardsPacker(cards, cards_width=100, cards_ratio=0.75)
    packer.update(400)

    cards[0].hidden = True
    packer.init()
    packer.update(400)

    assert "hero" not in packer.styles
    assert packer.styles["a"].left == "0%"
