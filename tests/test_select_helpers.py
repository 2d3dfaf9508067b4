import pytest
from bs4 import BeautifulSoup
from markupsafe import Markup

from formgen.config import RenderSettings
from formgen.errors import InvalidArgumentError
from formgen.models import DropdownRequest, ListBoxRequest, SelectOption
from formgen.select_helpers import (
    build_dropdown,
    build_list_box,
    build_list_options,
    dropdown,
    list_box,
)


@pytest.fixture()
def options() -> list[SelectOption]:
    return [SelectOption(text="One", value="1"), SelectOption(text="Two", value="2")]


def _select(markup: str):
    return BeautifulSoup(markup, "html.parser").find("select")


def test_dropdown_marks_matching_option(options):
    html = dropdown("number", options, selected_value="2")

    assert isinstance(html, Markup)
    assert html == (
        '<select id="number" name="number">\n'
        '<option value="1">One</option>\n'
        '<option selected="selected" value="2">Two</option>\n'
        "</select>"
    )
    assert html.count('selected="selected"') == 1


def test_dropdown_accepts_non_string_selected_value(options):
    select = _select(dropdown("number", options, selected_value=1))
    assert [opt["value"] for opt in select.find_all("option", selected=True)] == ["1"]


def test_dropdown_without_selection_keeps_caller_flags(options):
    items = [options[0], options[1].model_copy(update={"selected": True})]
    select = _select(dropdown("number", items))
    assert [opt["value"] for opt in select.find_all("option", selected=True)] == ["2"]


def test_dropdown_earlier_preselected_option_wins(options):
    items = [options[0].model_copy(update={"selected": True}), options[1]]
    select = _select(dropdown("number", items, selected_value="2"))
    assert [opt["value"] for opt in select.find_all("option", selected=True)] == ["1"]


def test_dropdown_name_overrides_caller_attribute(options):
    html = dropdown("number", options, attributes={"name": "other", "class": "wide"})
    assert html.count("name=") == 1
    select = _select(html)
    assert select["name"] == "number"
    assert select["class"] == ["wide"]


def test_caller_id_wins_over_generated_id(options):
    assert _select(dropdown("number", options, attributes={"id": "custom"}))["id"] == "custom"
    assert _select(list_box("number", options, attributes={"id": "custom"}))["id"] == "custom"


def test_default_option_comes_first_with_empty_value(options):
    html = list_box(
        "numbers",
        options,
        default_option="-- choose --",
        selected_values=["1", "2"],
        allow_multiple=True,
    )
    rendered = _select(html).find_all("option")
    assert rendered[0]["value"] == ""
    assert rendered[0].get_text() == "-- choose --"
    assert not rendered[0].has_attr("selected")
    assert [opt["value"] for opt in rendered[1:]] == ["1", "2"]
    assert all(opt.has_attr("selected") for opt in rendered[1:])


def test_list_box_multiple_selection(options):
    select = _select(list_box("numbers", options, selected_values=["1", "2"], allow_multiple=True))
    assert [opt["value"] for opt in select.find_all("option", selected=True)] == ["1", "2"]


def test_list_box_single_selection_keeps_first_match(options):
    select = _select(list_box("numbers", options, selected_values=["1", "2"], allow_multiple=False))
    assert [opt["value"] for opt in select.find_all("option", selected=True)] == ["1"]


def test_list_box_size_and_multiple_attributes(options):
    html = list_box("numbers", options, size=5, allow_multiple=True)
    assert html.startswith('<select id="numbers" multiple="multiple" name="numbers" size="5">')


def test_list_box_removes_caller_multiple_when_not_allowed(options):
    html = list_box("numbers", options, attributes={"multiple": "multiple"})
    assert "multiple" not in html


def test_list_box_overrides_caller_size_and_name(options):
    html = list_box("numbers", options, size=3, attributes={"size": 10, "name": "x"})
    select = _select(html)
    assert select["size"] == "3"
    assert select["name"] == "numbers"


def test_option_text_and_attributes_are_encoded():
    items = [SelectOption(text="Fish & <Chips>", value='say "hi"')]
    html = dropdown("food", items, attributes={"data-note": "a<b"})
    assert '<option value="say &#34;hi&#34;">Fish &amp; &lt;Chips&gt;</option>' in html
    assert 'data-note="a&lt;b"' in html


@pytest.mark.parametrize("name", ["", None])
def test_empty_name_is_rejected(options, name):
    with pytest.raises(InvalidArgumentError):
        dropdown(name, options)
    with pytest.raises(InvalidArgumentError):
        list_box(name, options)
    with pytest.raises(InvalidArgumentError):
        build_dropdown(DropdownRequest(name=name, options=options))
    with pytest.raises(InvalidArgumentError):
        build_list_box(ListBoxRequest(name=name, options=options))


def test_empty_inputs_render_minimal_markup():
    assert dropdown("empty") == '<select id="empty" name="empty">\n</select>'
    assert build_list_options(None) == "\n"


def test_settings_control_id_replacement(options):
    settings = RenderSettings(id_replacement="-")
    select = _select(dropdown("person.name", options, settings=settings))
    assert select["id"] == "person-name"
    assert select["name"] == "person.name"


def test_requests_accept_camel_case_payloads():
    request = ListBoxRequest.model_validate(
        {
            "name": "tags",
            "defaultOption": "none",
            "options": [{"text": "A", "value": 1}, {"text": "B"}],
            "selectedValues": ["b"],
            "allowMultiple": True,
        }
    )
    select = _select(build_list_box(request))
    assert [opt.get_text() for opt in select.find_all("option", selected=True)] == ["B"]
    assert select.find_all("option")[1]["value"] == "1"


def test_caller_options_are_not_mutated(options):
    list_box("numbers", options, selected_values=["1", "2"], allow_multiple=True)
    dropdown("number", options, selected_value="1")
    assert not any(option.selected for option in options)


def test_list_box_multiple_replaces_caller_value(options):
    html = list_box("numbers", options, allow_multiple=True, attributes={"multiple": "false"})
    assert _select(html)["multiple"] == "multiple"
    assert 'multiple="false"' not in html
