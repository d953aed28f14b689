"""Tests for slidedeck.core.slides — layout models, content coercion, Deck."""

import pytest
from pydantic import ValidationError

from slidedeck.core.slides import (
    Deck,
    DEFAULT_NAME,
    TitleSlide,
    BulletsSlide,
    ImageSlide,
    CodeSlide,
    BlankSlide,
    blank_slide,
    starter_slides,
    parse_slide,
    merge_slide,
    dump_slide,
    assign_slide_ids,
    commit_name,
)


# ── Layout models ───────────────────────────────────────────────────────

class TestLayoutModels:
    def test_blank_slide_defaults(self):
        s = blank_slide()
        assert s.layout == "title"
        assert s.title == ""
        assert s.content == ""
        assert len(s.id) == 32

    def test_ids_are_unique(self):
        assert blank_slide().id != blank_slide().id

    def test_parse_picks_model_by_layout(self):
        assert isinstance(parse_slide({"layout": "title"}), TitleSlide)
        assert isinstance(parse_slide({"layout": "bullets"}), BulletsSlide)
        assert isinstance(parse_slide({"layout": "image-center"}), ImageSlide)
        assert isinstance(parse_slide({"layout": "code"}), CodeSlide)
        assert isinstance(parse_slide({"layout": "blank"}), BlankSlide)

    def test_missing_layout_is_title(self):
        s = parse_slide({"title": "X"})
        assert isinstance(s, TitleSlide)
        assert s.title == "X"

    def test_unknown_layout_rejected(self):
        with pytest.raises(ValidationError):
            parse_slide({"layout": "video"})

    def test_invalid_image_fit_rejected(self):
        with pytest.raises(ValidationError):
            parse_slide({"layout": "image-center", "imageFit": "stretch"})

    def test_camel_case_image_fields(self):
        s = parse_slide({"layout": "image-center", "image": "http://x/y.png",
                         "imageFit": "cover", "imageScale": 150})
        assert s.image_fit == "cover"
        assert s.image_scale == 150

    def test_image_defaults(self):
        s = ImageSlide()
        assert s.effective_fit == "contain"
        assert s.effective_scale == 100

    def test_fields_of_other_layouts_ignored(self):
        s = parse_slide({"layout": "title", "code": "print(1)", "image": "a.png"})
        assert not hasattr(s, "code")
        assert not hasattr(s, "image")


# ── Content coercion ────────────────────────────────────────────────────

class TestContentCoercion:
    def test_bullets_from_text(self):
        s = BulletsSlide(content="one\ntwo\nthree")
        assert s.content == ["one", "two", "three"]

    def test_bullets_none_is_empty(self):
        assert BulletsSlide(content=None).content == []

    def test_text_from_list(self):
        s = TitleSlide(content=["a", "b"])
        assert s.content == "a\nb"

    def test_bullets_reject_non_strings(self):
        with pytest.raises(ValidationError):
            BulletsSlide(content=[1, 2])


# ── merge_slide ─────────────────────────────────────────────────────────

class TestMergeSlide:
    def test_patch_keeps_id(self):
        s = TitleSlide(id="abc", title="Old")
        updated = merge_slide(s, {"title": "New", "id": "other"})
        assert updated.id == "abc"
        assert updated.title == "New"

    def test_patch_returns_new_object(self):
        s = TitleSlide(title="Old")
        updated = merge_slide(s, {"title": "New"})
        assert s.title == "Old"
        assert updated is not s

    def test_switch_to_bullets_splits_content(self):
        s = TitleSlide(title="T", content="a\nb")
        updated = merge_slide(s, {"layout": "bullets"})
        assert isinstance(updated, BulletsSlide)
        assert updated.content == ["a", "b"]
        assert updated.title == "T"

    def test_switch_from_bullets_joins_content(self):
        s = BulletsSlide(content=["a", "b"])
        updated = merge_slide(s, {"layout": "title"})
        assert isinstance(updated, TitleSlide)
        assert updated.content == "a\nb"

    def test_switch_drops_layout_specific_fields(self):
        s = ImageSlide(image="a.png", image_fit="cover")
        updated = merge_slide(s, {"layout": "code", "code": "x = 1"})
        assert isinstance(updated, CodeSlide)
        assert updated.code == "x = 1"
        assert "image" not in dump_slide(updated)

    def test_camel_case_patch(self):
        s = ImageSlide()
        updated = merge_slide(s, {"imageScale": 50})
        assert updated.image_scale == 50

    def test_notes_survive_layout_switch(self):
        s = TitleSlide(notes="say hi")
        assert merge_slide(s, {"layout": "blank"}).notes == "say hi"


# ── dump_slide ──────────────────────────────────────────────────────────

class TestDumpSlide:
    def test_camel_case_and_no_nulls(self):
        s = ImageSlide(id="i1", image="a.png", image_fit="fill")
        data = dump_slide(s)
        assert data == {"id": "i1", "layout": "image-center", "image": "a.png", "imageFit": "fill"}

    def test_bullets_dump_list(self):
        data = dump_slide(BulletsSlide(id="b", content=["x"]))
        assert data["content"] == ["x"]


# ── assign_slide_ids ────────────────────────────────────────────────────

class TestAssignSlideIds:
    def test_keeps_existing_ids(self):
        out = assign_slide_ids([{"id": "a"}, {"id": "b"}])
        assert [s["id"] for s in out] == ["a", "b"]

    def test_fills_missing_and_empty(self):
        out = assign_slide_ids([{"title": "x"}, {"id": ""}, {"id": None}])
        ids = [s["id"] for s in out]
        assert all(ids)
        assert len(set(ids)) == 3

    def test_replaces_duplicates(self):
        out = assign_slide_ids([{"id": "a"}, {"id": "a"}])
        assert out[0]["id"] == "a"
        assert out[1]["id"] != "a"

    def test_integer_ids_become_strings(self):
        out = assign_slide_ids([{"id": 7}])
        assert out[0]["id"] == "7"

    def test_input_not_modified(self):
        raw = [{"title": "x"}]
        assign_slide_ids(raw)
        assert "id" not in raw[0]

    def test_non_object_entry(self):
        with pytest.raises(TypeError):
            assign_slide_ids(["not a slide"])


# ── Deck ────────────────────────────────────────────────────────────────

class TestDeck:
    def _deck(self, n=3) -> Deck:
        return Deck(slides=[TitleSlide(id=f"s{i}", title=f"Slide {i}") for i in range(n)])

    def test_default_deck_is_starter(self):
        deck = Deck()
        assert deck.name == DEFAULT_NAME
        assert [s.id for s in deck.slides] == [s.id for s in starter_slides()]
        assert isinstance(deck.slides[1], BulletsSlide)
        assert isinstance(deck.slides[2], CodeSlide)

    def test_empty_deck_rejected(self):
        with pytest.raises(ValidationError):
            Deck(slides=[])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError):
            Deck(slides=[TitleSlide(id="a"), TitleSlide(id="a")])

    def test_get_and_index_of(self):
        deck = self._deck()
        assert deck.get("s1").title == "Slide 1"
        assert deck.get("missing") is None
        assert deck.index_of("s2") == 2
        assert deck.index_of("missing") == -1

    def test_add(self):
        deck = self._deck(1)
        deck.add(TitleSlide(id="new"))
        assert len(deck) == 2
        assert deck.slides[-1].id == "new"

    def test_add_duplicate_id(self):
        deck = self._deck(1)
        with pytest.raises(ValueError):
            deck.add(TitleSlide(id="s0"))

    def test_replace(self):
        deck = self._deck()
        assert deck.replace(TitleSlide(id="s1", title="Changed")) is True
        assert deck.slides[1].title == "Changed"
        assert deck.replace(TitleSlide(id="nope")) is False

    def test_remove(self):
        deck = self._deck()
        assert deck.remove("s1") is True
        assert [s.id for s in deck.slides] == ["s0", "s2"]
        assert deck.remove("missing") is False

    def test_remove_last_slide_refused(self):
        deck = self._deck(1)
        assert deck.remove("s0") is False
        assert len(deck) == 1

    def test_move(self):
        deck = self._deck()
        assert deck.move(0, 2) is True
        assert [s.id for s in deck.slides] == ["s1", "s2", "s0"]

    def test_move_same_index(self):
        deck = self._deck()
        assert deck.move(1, 1) is False

    def test_move_out_of_range(self):
        deck = self._deck()
        with pytest.raises(IndexError):
            deck.move(0, 3)
        with pytest.raises(IndexError):
            deck.move(-1, 0)

    def test_to_summary(self):
        deck = Deck(slides=[
            TitleSlide(id="a", title="Hello", content="x" * 100, notes="n"),
            BulletsSlide(id="b", content=["1", "2"]),
        ])
        summary = deck.to_summary()
        assert summary[0]["ordinal"] == 1
        assert summary[0]["content_snippet"].endswith("...")
        assert summary[0]["has_notes"] is True
        assert summary[1]["title"] == "(untitled)"
        assert summary[1]["content_snippet"] == "2 bullet(s)"


class TestCommitName:
    def test_trims(self):
        assert commit_name("  Talk  ") == "Talk"

    def test_blank_is_default(self):
        assert commit_name("   ") == DEFAULT_NAME
        assert commit_name("") == DEFAULT_NAME
