"""Tests for species page field extraction."""

import pytest

from peipsi_birds.common.data_models import LeafFields
from peipsi_birds.common.exceptions import (
    HTMLStructuralAssumptionException,
    PatternMismatchException,
)
from peipsi_birds.common.lxml_page_element import LxmlPageElement
from peipsi_birds.extractor import (
    HABITAT_LABEL,
    SIGNS_LABEL,
    extract,
    parse_lat_name,
    parse_rus_name,
    strip_label,
)
from tests.mock_server import species_html

URL = "https://birds.example/poganki/pogankovye/chomga/"


def snapshot(content: str) -> LxmlPageElement:
    return LxmlPageElement.from_html(content, URL)


class TestParseNames:
    def test_heading_splits_into_names(self):
        heading = "Чомга Podiceps cristatus"

        assert parse_rus_name(heading) == "Чомга"
        assert parse_lat_name(heading) == "Podiceps cristatus"

    def test_multiword_russian_name(self):
        heading = "Красношейная поганка Podiceps auritus"

        assert parse_rus_name(heading) == "Красношейная поганка"
        assert parse_lat_name(heading) == "Podiceps auritus"

    def test_parenthesized_clause_is_kept(self):
        heading = "Чернозобая гагара (полярная) Gavia arctica"

        assert parse_rus_name(heading) == "Чернозобая гагара (полярная)"

    def test_hyphenated_name_and_surrounding_whitespace(self):
        heading = "\n   Серая-цапля   Ardea cinerea\n"

        assert parse_rus_name(heading) == "Серая-цапля"
        assert parse_lat_name(heading) == "Ardea cinerea"

    def test_latin_name_takes_first_two_runs_only(self):
        assert (
            parse_lat_name("Серая ворона Corvus cornix cornix")
            == "Corvus cornix"
        )

    def test_missing_latin_name_raises(self):
        with pytest.raises(PatternMismatchException) as exc_info:
            parse_lat_name("Чомга", URL)

        assert exc_info.value.field == "latName"
        assert exc_info.value.request_url == URL

    def test_missing_russian_name_raises(self):
        with pytest.raises(PatternMismatchException) as exc_info:
            parse_rus_name("Podiceps cristatus", URL)

        assert exc_info.value.field == "rusName"


class TestStripLabel:
    def test_strips_signs_label(self):
        assert (
            strip_label("Признаки. Крупная птица с хохолком.", SIGNS_LABEL)
            == "Крупная птица с хохолком."
        )

    def test_strips_habitat_label(self):
        assert (
            strip_label("Местообитание. Озёра.", HABITAT_LABEL) == "Озёра."
        )

    def test_text_without_label_is_returned_verbatim(self):
        text = "  Крупная птица.  "

        assert strip_label(text, SIGNS_LABEL) == text

    def test_only_first_label_is_removed(self):
        text = "Признаки. Признаки. повторяются."

        assert strip_label(text, SIGNS_LABEL) == "Признаки. повторяются."


class TestExtract:
    def test_extracts_all_fields(self):
        page = snapshot(
            species_html(
                "Чомга Podiceps cristatus",
                "Признаки. Крупная птица с хохолком.",
                "Местообитание. Озёра с зарослями тростника.",
            )
        )

        assert extract(page) == LeafFields(
            rus_name="Чомга",
            lat_name="Podiceps cristatus",
            signs="Крупная птица с хохолком.",
            habitat="Озёра с зарослями тростника.",
        )

    def test_paragraph_text_includes_inline_markup(self):
        page = snapshot(
            "<html><body><article><h1>Чомга Podiceps cristatus</h1>"
            "<p>Признаки. <b>Крупная</b> птица.</p>"
            "<p>Местообитание. Озёра.</p></article></body></html>"
        )

        assert extract(page).signs == "Крупная птица."

    def test_missing_second_paragraph_raises(self):
        page = snapshot(
            species_html("Чомга Podiceps cristatus", "Признаки. Птица.", None)
        )

        with pytest.raises(HTMLStructuralAssumptionException) as exc_info:
            extract(page)

        assert exc_info.value.description == "habitat paragraph"
        assert exc_info.value.request_url == URL

    def test_missing_heading_raises(self):
        page = snapshot(
            "<html><body><article><p>Признаки. Птица.</p>"
            "<p>Местообитание. Озёра.</p></article></body></html>"
        )

        with pytest.raises(HTMLStructuralAssumptionException) as exc_info:
            extract(page)

        assert exc_info.value.description == "species heading"

    def test_paragraphs_outside_article_are_ignored(self):
        page = snapshot(
            "<html><body><p>Признаки. Не та.</p><p>Местообитание. Не то.</p>"
            "<article><h1>Чомга Podiceps cristatus</h1></article>"
            "</body></html>"
        )

        with pytest.raises(HTMLStructuralAssumptionException):
            extract(page)

    def test_heading_without_latin_name_raises_pattern_mismatch(self):
        page = snapshot(species_html("Чомга", "Признаки. А.", "Местообитание. Б."))

        with pytest.raises(PatternMismatchException):
            extract(page)
