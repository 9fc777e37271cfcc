"""Tests for content, history and persona models."""

import pytest

from story_reader.errors import InvalidContentError
from story_reader.models import (
    Chapter,
    ContentItem,
    ContentModel,
    HistoryEntry,
    PersonaAnswers,
    load_catalog,
    total_units,
)


class TestContentItem:
    """Tests for content item invariants and loading."""

    def test_total_units(self, paged_item, chaptered_item):
        assert total_units(paged_item) == 5
        assert total_units(chaptered_item) == 6

    def test_paged_needs_a_page(self):
        with pytest.raises(InvalidContentError):
            ContentItem(id="empty", title="Empty", page_count=0)

    def test_chaptered_needs_a_chapter(self):
        with pytest.raises(InvalidContentError):
            ContentItem(id="empty", title="Empty", content_model=ContentModel.CHAPTERED)

    def test_chapter_needs_a_paragraph(self):
        with pytest.raises(InvalidContentError):
            ContentItem(
                id="hollow",
                title="Hollow",
                content_model=ContentModel.CHAPTERED,
                chapters=(Chapter("One", ("p",)), Chapter("Two", ())),
            )

    def test_from_front_end_layout(self):
        """Comic records from the web app use type/pages/textContent."""
        records = [
            {
                "id": "1",
                "title": "Image Story",
                "categories": ["Dark & Brooding"],
                "type": "image",
                "pages": [{"id": 1, "imageUrl": "a.png"}, {"id": 2, "imageUrl": "b.png"}],
                "rating": "4.6",
                "releaseDate": "2026-01-02",
            },
            {
                "id": "2",
                "title": "Text Story",
                "type": "text",
                "textContent": [
                    {"id": 1, "title": "Start", "paragraphs": ["a", "b"]},
                    {"id": 2, "title": "End", "paragraphs": ["c"]},
                ],
            },
        ]
        image, text = load_catalog(records)

        assert image.content_model == ContentModel.PAGED
        assert image.page_count == 2
        assert image.rating == 4.6
        assert image.release_date == "2026-01-02"
        assert text.content_model == ContentModel.CHAPTERED
        assert text.total_units == 3
        assert text.chapters[1].title == "End"

    def test_dict_round_trip(self, chaptered_item):
        assert ContentItem.from_dict(chaptered_item.to_dict()) == chaptered_item

    def test_missing_content_model(self):
        with pytest.raises(InvalidContentError):
            ContentItem.from_dict({"id": "x", "title": "No type"})

    def test_unknown_content_model(self):
        with pytest.raises(InvalidContentError):
            ContentItem.from_dict({"id": "x", "content_model": "scroll", "page_count": 1})


class TestHistoryEntry:
    """Tests for ledger entry serialization."""

    def test_to_dict_keys(self, make_entry):
        data = make_entry("a", position=1, pct=25).to_dict()
        assert set(data) == {"contentItemId", "absolutePosition", "timestamp", "progressPercentage"}

    def test_from_legacy_keys(self):
        entry = HistoryEntry.from_dict(
            {"comicId": "7", "lastReadPage": 3, "lastReadAt": "2025-01-01T00:00:00", "progress": 75}
        )
        assert entry == HistoryEntry("7", 3, "2025-01-01T00:00:00", 75)


class TestPersonaAnswers:
    """Tests for persona answer serialization."""

    def test_binary_answers_order(self):
        answers = PersonaAnswers(
            justice_or_mercy="Mercy",
            plan_or_mess="Perfect Plan",
            risk_or_faith="Leap of Faith",
            twist_or_payoff="Shocking Twist",
            hope_or_honesty="Brutal Honesty",
            greater_good_or_personal_bond="Greater Good",
        )
        assert answers.binary_answers == [
            "Mercy", "Perfect Plan", "Leap of Faith",
            "Shocking Twist", "Brutal Honesty", "Greater Good",
        ]

    def test_partial_dict(self):
        answers = PersonaAnswers.from_dict({"vibes": ["Witty & Charming"], "favoriteTwist": "Karma hits hard"})

        assert answers.vibes == ["Witty & Charming"]
        assert answers.favorite_twist == "Karma hits hard"
        assert answers.story_ending_preference == ""

    def test_camel_case_round_trip(self):
        answers = PersonaAnswers(story_ending_preference="Love wins", vibes=["Epic & Grandiose"])
        data = answers.to_dict()

        assert data["storyEndingPreference"] == "Love wins"
        assert PersonaAnswers.from_dict(data) == answers
