# ABOUTME: Tests for wikitext parsing into sections and infoboxes
# ABOUTME: Pure functions, no HTTP calls

import pytest

from lorekeeper.wiki.parser import camel_case, display_text, parse_document, strip_noise

PAGE = """{{Infobox item
|image = Carsomyr +5.png
|name = Carsomyr +5
|item type = [[Two-handed sword|Two-Handed Sword]]
|value = 20,000
|notes =
}}
'''Carsomyr''' is a [[two-handed sword]].

== Description ==
''Carsomyr is a weapon of legend.''

=== Trivia ===
Forged by Tarsil.

== Gallery ==
{{Infobox image
|image = Carsomyr sketch.png
}}
"""


class TestCamelCase:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("item type", "itemType"),
            ("value", "value"),
            ("Value", "value"),
            ("base_price", "basePrice"),
            ("basePrice", "basePrice"),
            ("image caption", "imageCaption"),
            ("HP", "hp"),
            ("armor class 2", "armorClass2"),
            ("", ""),
        ],
    )
    def test_camel_case(self, key, expected):
        assert camel_case(key) == expected


class TestDisplayText:
    def test_links_become_labels(self):
        assert display_text("[[Two-handed sword|Two-Handed Sword]]") == "Two-Handed Sword"

    def test_plain_links_keep_their_title(self):
        assert display_text("found in [[Ulcaster School]]") == "found in Ulcaster School"

    def test_formatting_and_templates_are_dropped(self):
        assert display_text("'''Bold''' and ''italic'' {{Citation needed}}") == "Bold and italic"

    def test_references_are_dropped(self):
        assert display_text("20,000<ref>Item file</ref> gold") == "20,000 gold"

    def test_whitespace_is_collapsed(self):
        assert display_text("  one\n\n two   three ") == "one two three"

    def test_html_entities_are_decoded(self):
        assert display_text("Algernon&#39;s Cloak") == "Algernon's Cloak"


class TestStripNoise:
    def test_file_links_with_nested_links_are_removed(self):
        text = "Before [[File:Carsomyr.png|thumb|Held by [[Keldorn]]]] after"
        assert strip_noise(text) == "Before  after"

    def test_category_links_and_comments_are_removed(self):
        assert strip_noise("Text<!-- hidden -->[[Category:Magical weapons]]") == "Text"

    def test_self_closing_reference_with_slash_in_name(self):
        text = 'Sold by Ribald<ref name="a/b" /> in the Mart. Ask Jaheira.<ref>Item file</ref>'
        assert strip_noise(text) == "Sold by Ribald in the Mart. Ask Jaheira."

    def test_named_reference_pair_is_removed(self):
        assert strip_noise('A<ref name="src/1">note</ref>B') == "AB"

    def test_reference_list_is_removed(self):
        assert strip_noise("Notes\n<references />") == "Notes\n"

    def test_tables_are_removed(self):
        text = 'Intro\n{| class="wikitable"\n! A !! B\n|-\n| 1 || 2\n|}\nOutro'
        assert "wikitable" not in strip_noise(text)
        assert "Outro" in strip_noise(text)


class TestParseDocument:
    def test_sections_in_document_order(self):
        document = parse_document(PAGE)

        assert [section.title for section in document.sections] == [None, "Description", "Trivia", "Gallery"]
        assert [section.level for section in document.sections] == [0, 2, 3, 2]

    def test_lead_section_holds_the_infobox(self):
        lead = parse_document(PAGE).lead

        assert len(lead.infoboxes) == 1
        infobox = lead.infoboxes[0]
        assert infobox.name == "Infobox item"
        assert infobox.fields["item type"] == "Two-Handed Sword"
        assert infobox.fields["value"] == "20,000"

    def test_empty_field_is_kept_as_empty_string(self):
        fields = parse_document(PAGE).lead.infoboxes[0].fields

        assert fields["notes"] == ""
        assert "weight" not in fields

    def test_section_text_excludes_subsections(self):
        description = parse_document(PAGE).section("description")

        assert "weapon of legend" in description.text
        assert "Tarsil" not in description.text

    def test_later_sections_keep_their_own_infoboxes(self):
        gallery = parse_document(PAGE).section("Gallery")

        assert [infobox.name for infobox in gallery.infoboxes] == ["Infobox image"]

    def test_page_without_infobox(self):
        document = parse_document("Just some text about [[Acorns]].")

        assert len(document.sections) == 1
        assert document.sections[0].infoboxes == []

    def test_empty_markup(self):
        document = parse_document("")

        assert all(not section.infoboxes for section in document.sections)

    def test_model_dump_is_plain_data(self):
        data = parse_document(PAGE).model_dump()

        assert data["sections"][0]["infoboxes"][0]["fields"]["name"] == "Carsomyr +5"
