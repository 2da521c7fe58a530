import copy

import pytest

from domain.errors import InvalidCategory, MissingCategory, ValidationError
from domain.models import (
    Book,
    Disc,
    InteractiveMedia,
    ItemCategory,
    LibraryItem,
    Periodical,
)


def test_book_with_zero_pages_is_rejected():
    with pytest.raises(ValidationError):
        Book("B100001", "Dune", "Frank Herbert", 0)


@pytest.mark.parametrize(
    "factory",
    [
        lambda title: Book("B100001", title, "Author", 10),
        lambda title: Disc("D200001", title, "Director", 90),
        lambda title: Periodical("M300001", title, "Editor", 3),
        lambda title: InteractiveMedia("V400001", title, "Publisher", "PC"),
    ],
)
@pytest.mark.parametrize("title", ["", "   ", None])
def test_empty_title_is_rejected_for_every_variant(factory, title):
    with pytest.raises(ValidationError):
        factory(title)


def test_empty_creator_and_platform_are_rejected():
    with pytest.raises(ValidationError):
        Book("B100001", "Dune", "", 412)
    with pytest.raises(ValidationError):
        InteractiveMedia("V400001", "Halo", "Bungie", "  ")


@pytest.mark.parametrize("value", [-1, 0, True, "abc", 2.5])
def test_numeric_details_must_be_positive_ints(value):
    with pytest.raises(ValidationError):
        Disc("D200001", "Inception", "Christopher Nolan", value)


def test_numeric_detail_accepts_digit_strings():
    issue = Periodical("M300001", "Science Monthly", "Jane Smith", " 35 ")
    assert issue.issue_number == 35


def test_setter_validation_keeps_previous_value():
    book = Book("B100001", "Dune", "Frank Herbert", 412)
    with pytest.raises(ValidationError):
        book.pages = -5
    with pytest.raises(ValidationError):
        book.title = ""
    assert book.pages == 412
    assert book.title == "Dune"


def test_item_id_cannot_change_once_assigned():
    book = Book("B100001", "Dune", "Frank Herbert", 412)
    with pytest.raises(ValidationError):
        book.item_id = "B100002"
    book.item_id = "B100001"
    assert book.item_id == "B100001"


def test_uniform_detail_accessors():
    items = [
        Book("B100001", "Dune", "Frank Herbert", 412),
        Disc("D200001", "Inception", "Christopher Nolan", 148),
        Periodical("M300001", "Science Monthly", "Jane Smith", 35),
        InteractiveMedia("V400001", "The Legend of Gaming", "Epic Studios", "PC"),
    ]
    assert [i.detail_label for i in items] == ["Pages", "Runtime (minutes)", "Issue number", "Platform"]
    assert [i.detail_value for i in items] == [412, 148, 35, "PC"]

    items[0].set_detail("500")
    items[3].set_detail("Switch")
    assert items[0].pages == 500
    assert items[3].platform == "Switch"
    with pytest.raises(ValidationError):
        items[1].set_detail(0)


def test_values_are_trimmed_and_to_dict_is_flat():
    game = InteractiveMedia("V400001", "  Halo ", " Bungie", " Xbox ")
    assert game.to_dict() == {
        "item_id": "V400001",
        "category": "interactive_media",
        "title": "Halo",
        "creator": "Bungie",
        "detail_label": "Platform",
        "detail_value": "Xbox",
    }


def test_equality_is_by_value_and_copies_are_independent():
    book = Book("B100001", "Dune", "Frank Herbert", 412)
    clone = copy.deepcopy(book)
    assert clone == book
    clone.pages = 10
    assert clone != book
    assert Book("B100001", "Dune", "Frank Herbert", 412) != Disc("B100001", "Dune", "Frank Herbert", 412)


def test_str_matches_catalog_listing_format():
    book = Book("B100001", "Dune", "Frank Herbert", 412)
    assert str(book) == "[Book] ID: B100001 - Title: Dune - Author: Frank Herbert - Pages: 412"


class TestItemCategory:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("book", ItemCategory.BOOK),
            ("BOOK", ItemCategory.BOOK),
            (" Disc ", ItemCategory.DISC),
            ("dvd", ItemCategory.DISC),
            ("magazine", ItemCategory.PERIODICAL),
            ("interactive-media", ItemCategory.INTERACTIVE_MEDIA),
            ("Interactive Media", ItemCategory.INTERACTIVE_MEDIA),
            ("VIDEO_GAME", ItemCategory.INTERACTIVE_MEDIA),
        ],
    )
    def test_parse_accepts_names_and_aliases(self, name, expected):
        assert ItemCategory.parse(name) is expected

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_parse_missing(self, name):
        with pytest.raises(MissingCategory):
            ItemCategory.parse(name)

    def test_parse_invalid(self):
        with pytest.raises(InvalidCategory) as excinfo:
            ItemCategory.parse("comic")
        assert excinfo.value.category == "comic"

    def test_prefixes(self):
        assert {c.value: c.prefix for c in ItemCategory} == {
            "book": "B1",
            "disc": "D2",
            "periodical": "M3",
            "interactive_media": "V4",
        }


def test_base_item_cannot_be_built_directly():
    with pytest.raises(TypeError):
        LibraryItem("X1", "Title", "Creator")


def test_non_text_platform_reports_its_type():
    game = InteractiveMedia("V400001", "Halo", "Bungie", "Xbox")
    with pytest.raises(ValidationError, match="Platform must be text, got int"):
        game.set_detail(5)
    with pytest.raises(ValidationError, match="Platform must not be empty"):
        game.set_detail("   ")
    assert game.platform == "Xbox"
