"""Tests for {{variable}} template substitution."""

from leadcatch.services.templates import (
    MISSED_CALL_VARIABLES,
    NOTIFICATION_VARIABLES,
    extract_variables,
    render,
    unknown_variables,
)


class TestRender:
    def test_substitutes_ticket_and_company(self):
        result = render("Dossier {{ticket}} reçu. {{company}}", {"ticket": "#REQ-1234", "company": "Acme"})
        assert result == "Dossier #REQ-1234 reçu. Acme"

    def test_missing_variable_left_literal(self):
        result = render("Bonjour {{client_name}}, ticket {{ticket}}", {"ticket": "#REQ-000042"})
        assert result == "Bonjour {{client_name}}, ticket #REQ-000042"

    def test_replaces_every_occurrence(self):
        assert render("{{ticket}} / {{ticket}}", {"ticket": "T"}) == "T / T"

    def test_case_sensitive(self):
        assert render("{{Ticket}}", {"ticket": "T"}) == "{{Ticket}}"

    def test_inserted_value_is_literal(self):
        assert render("{{company}}", {"company": "{{unknown}}"}) == "{{unknown}}"

    def test_inserted_value_is_not_substituted_again(self):
        result = render(
            "Ticket {{ticket}} from {{client_phone}}",
            {"ticket": "T1", "client_phone": "{{company}}", "company": "Acme"},
        )
        assert result == "Ticket T1 from {{company}}"

    def test_inserted_value_with_earlier_variable_token(self):
        result = render("{{company}} {{ticket}}", {"company": "{{ticket}}", "ticket": "T1"})
        assert result == "{{ticket}} T1"

    def test_empty_template(self):
        assert render("", {"ticket": "T"}) == ""
        assert render(None, {"ticket": "T"}) == ""

    def test_spaces_inside_braces_not_matched(self):
        assert render("{{ ticket }}", {"ticket": "T"}) == "{{ ticket }}"


class TestVariables:
    def test_extract_variables_sorted_unique(self):
        assert extract_variables("{{ticket}} {{company}} {{ticket}}") == ["company", "ticket"]

    def test_unknown_variables(self):
        template = "{{ticket}} {{client_name}}"
        assert unknown_variables(template, NOTIFICATION_VARIABLES) == ["client_name"]

    def test_known_sets(self):
        assert set(NOTIFICATION_VARIABLES) == {"ticket", "client_phone", "company", "date"}
        assert set(MISSED_CALL_VARIABLES) == {"company", "form_link"}
