"""Tests for the client-side taxonomy controller, run against the real app via TestClient"""

from __future__ import annotations

import httpx
import pytest

from cms_taxonomy.client.controller import (
    ListState,
    TaxonomyApi,
    TaxonomyCache,
    TaxonomyClientError,
    TaxonomyController,
)
from cms_taxonomy.schemas.taxonomy import ProjectType, Tag, TagType
from cms_taxonomy.service.color import DEFAULT_TAG_TYPE_COLOR


@pytest.fixture()
def api(client):
    return TaxonomyApi(client)


@pytest.fixture()
def controller(api):
    return TaxonomyController(api)


def _add_project_type(controller, name):
    controller.project_types.start_create()
    controller.project_types.name = name
    return controller.create_project_type()


def _add_tag_type(controller, name, color="#228B22"):
    controller.tag_types.start_create()
    controller.tag_types.name = name
    controller.tag_types.color = color
    return controller.create_tag_type()


def _add_tag(controller, name, color=""):
    controller.tags.start_create()
    controller.tags.name = name
    controller.tags.color = color
    return controller.create_tag()


# =========================================================================
# ListState
# =========================================================================


class TestListState:
    def test_create_and_cancel(self):
        state = ListState(default_color="#3B82F6")
        state.start_create()
        state.name = "Draft"

        assert state.mode == "creating"

        state.cancel_create()
        assert state.mode == "idle"
        assert state.name == ""
        assert state.color == "#3B82F6"

    def test_edit_prefills_form(self):
        state = ListState(default_color="#3B82F6")
        entity = TagType(id="t1", name="Industry", color="#228B22")

        state.start_edit(entity)

        assert state.mode == "editing"
        assert (state.editing_id, state.name, state.color) == ("t1", "Industry", "#228B22")

    def test_toggle_is_accordion(self):
        state = ListState()
        state.toggle_select("a")
        assert state.selected_id == "a"
        state.toggle_select("b")
        assert state.selected_id == "b"
        state.toggle_select("b")
        assert state.selected_id is None

    def test_editing_row_cannot_be_toggled(self):
        state = ListState()
        state.toggle_select("a")
        state.start_edit(ProjectType(id="b", name="B"))

        assert state.toggle_select("b") is False
        assert state.selected_id == "a"

    def test_editing_does_not_clear_selection(self):
        state = ListState()
        state.toggle_select("a")
        state.start_edit(ProjectType(id="b", name="B"))
        assert state.selected_id == "a"

    def test_forget_clears_selected_and_editing(self):
        state = ListState()
        state.toggle_select("a")
        state.start_edit(ProjectType(id="a", name="A"))

        state.forget("a")

        assert state.selected_id is None
        assert state.mode == "idle"


# =========================================================================
# Cache
# =========================================================================


class TestTaxonomyCache:
    def test_replace_tag_type_inside_parent(self):
        cache = TaxonomyCache()
        industry = TagType(id="t1", name="Industry", color="#228B22", project_type_id="p1")
        cache.load([ProjectType(id="p1", name="Website", tag_types=[industry])])

        refreshed = TagType(
            id="t1",
            name="Industry",
            color="#228B22",
            project_type_id="p1",
            tags=[Tag(id="g1", name="Healthcare", tag_type_id="t1")],
        )
        cache.replace(refreshed)

        assert cache.project_type("p1").tag_types == [refreshed]
        assert cache.tag_type("t1").tags[0].name == "Healthcare"

    def test_replace_appends_unknown_subtree(self):
        cache = TaxonomyCache()
        cache.replace(ProjectType(id="p1", name="Website"))
        cache.replace(TagType(id="g", name="Global", color="#000000"))

        assert [pt.id for pt in cache.project_types] == ["p1"]
        assert [tt.id for tt in cache.global_tag_types] == ["g"]

    def test_replace_rejects_other_types(self):
        with pytest.raises(TypeError):
            TaxonomyCache().replace({"id": "x"})


# =========================================================================
# Controller against the API
# =========================================================================


def test_refresh_selects_first_project_type(client, controller):
    client.post("/project-types", json={"name": "Website"})
    client.post("/project-types", json={"name": "Branding"})

    assert controller.refresh() is True

    assert [pt.name for pt in controller.cache.project_types] == ["Website", "Branding"]
    assert controller.selected_project_type.name == "Website"


def test_refresh_with_no_project_types(controller):
    assert controller.refresh() is True
    assert controller.selected_project_type is None


def test_create_project_type_selects_it(controller):
    controller.refresh()
    created = _add_project_type(controller, "Website")

    assert created.name == "Website"
    assert controller.project_types.mode == "idle"
    assert controller.project_types.name == ""
    assert controller.selected_project_type.id == created.id


def test_blank_name_is_not_submitted(client, controller):
    controller.project_types.start_create()
    controller.project_types.name = "   "

    assert controller.create_project_type() is None
    assert controller.project_types.mode == "creating"
    assert client.get("/project-types").json() == []


def test_update_project_type_replaces_subtree(controller):
    created = _add_project_type(controller, "Website")
    _add_tag_type(controller, "Industry")

    controller.project_types.start_edit(controller.cache.project_type(created.id))
    controller.project_types.name = "Websites"
    updated = controller.update_project_type(created.id)

    assert updated.name == "Websites"
    assert controller.cache.project_type(created.id).name == "Websites"
    assert [tt.name for tt in controller.cache.project_type(created.id).tag_types] == ["Industry"]
    assert controller.project_types.mode == "idle"


def test_scenario_tag_inherits_tag_type_color(controller):
    _add_project_type(controller, "Website")
    industry = _add_tag_type(controller, "Industry", "#228B22")
    controller.select_tag_type(industry.id)
    _add_tag(controller, "Healthcare")

    controller.refresh()
    tag_type = controller.selected_project_type.tag_types[0]
    tag = tag_type.tags[0]

    assert tag.color is None
    assert controller.badge(tag, tag_type) == ("#228B22", "#ffffff")


def test_tag_type_form_defaults_to_blue(controller):
    controller.tag_types.start_create()
    assert controller.tag_types.color == DEFAULT_TAG_TYPE_COLOR


def test_tag_lifecycle_updates_cache(controller):
    _add_project_type(controller, "Website")
    industry = _add_tag_type(controller, "Industry")
    controller.select_tag_type(industry.id)

    tag_type = _add_tag(controller, "Healthcare", "#ff0000")
    tag = tag_type.tags[0]
    assert controller.cache.tag_type(industry.id).tags[0].color == "#ff0000"

    controller.tags.start_edit(tag)
    assert controller.tags.color == "#ff0000"
    controller.tags.name = "Health"
    controller.tags.color = ""
    controller.update_tag(tag.id)
    assert [(t.name, t.color) for t in controller.cache.tag_type(industry.id).tags] == [("Health", None)]

    controller.delete_tag(tag.id)
    assert controller.cache.tag_type(industry.id).tags == []


def test_deleting_selected_tag_type_falls_back_to_idle(controller):
    _add_project_type(controller, "Website")
    industry = _add_tag_type(controller, "Industry")
    controller.select_tag_type(industry.id)
    _add_tag(controller, "Healthcare")
    assert controller.selected_tag_type.id == industry.id

    assert controller.delete_tag_type(industry.id) is True

    assert controller.tag_types.selected_id is None
    assert controller.selected_tag_type is None
    assert controller.tag_types.mode == "idle"
    assert controller.tags.mode == "idle"
    assert controller.selected_project_type.tag_types == []


def test_deleting_edited_tag_type_cancels_edit(controller):
    _add_project_type(controller, "Website")
    industry = _add_tag_type(controller, "Industry")
    controller.tag_types.start_edit(industry)

    controller.delete_tag_type(industry.id)

    assert controller.tag_types.mode == "idle"
    assert controller.tag_types.name == ""


def test_deleting_selected_project_type_selects_first_remaining(controller):
    website = _add_project_type(controller, "Website")
    branding = _add_project_type(controller, "Branding")
    social = _add_project_type(controller, "Social")
    controller.project_types.selected_id = branding.id

    controller.delete_project_type(branding.id)

    assert [pt.id for pt in controller.cache.project_types] == [website.id, social.id]
    assert controller.selected_project_type.id == website.id


def test_deleting_last_project_type_clears_selection(controller):
    website = _add_project_type(controller, "Website")

    controller.delete_project_type(website.id)

    assert controller.selected_project_type is None
    assert controller.cache.project_types == []


def test_failed_call_leaves_state_unchanged(client, controller):
    website = _add_project_type(controller, "Website")
    client.delete(f"/project-types/{website.id}")

    controller.tag_types.start_create()
    controller.tag_types.name = "Industry"
    result = controller.create_tag_type()

    assert result is None
    assert controller.tag_types.mode == "creating"
    assert controller.tag_types.name == "Industry"
    assert controller.tag_types.is_submitting is False
    assert controller.cache.project_type(website.id).tag_types == []
    assert controller.last_error.status_code == 404
    assert controller.last_error.message == "Project type not found"


def test_failed_delete_keeps_selection(client, controller):
    website = _add_project_type(controller, "Website")
    client.delete(f"/project-types/{website.id}")

    assert controller.delete_project_type(website.id) is False
    assert controller.selected_project_type.id == website.id


def test_api_raises_client_error_with_message(api):
    with pytest.raises(TaxonomyClientError) as excinfo:
        api.create_project_type("")

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Name is required"


def test_api_wraps_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = TaxonomyApi(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://cms"))

    with pytest.raises(TaxonomyClientError) as excinfo:
        api.list_project_types()

    assert excinfo.value.status_code is None
    assert "connection refused" in excinfo.value.message


def test_refresh_loads_global_tag_types(client, controller):
    shared = client.post("/tag-types", json={"name": "Shared", "color": "#228B22"}).json()
    website = client.post("/project-types", json={"name": "Website"}).json()
    client.post(f"/project-types/{website['id']}/tag-types", json={"name": "Industry", "color": "#000000"})

    controller.refresh()

    assert [tt.id for tt in controller.cache.global_tag_types] == [shared["id"]]
    assert controller.select_tag_type(shared["id"]) is True
    assert controller.selected_tag_type.name == "Shared"

    controller.tags.start_create()
    controller.tags.name = "Common"
    controller.create_tag()
    assert [tag.name for tag in controller.cache.global_tag_types[0].tags] == ["Common"]


def test_refresh_resets_tag_form_when_selected_tag_type_is_gone(client, controller):
    _add_project_type(controller, "Website")
    industry = _add_tag_type(controller, "Industry")
    controller.select_tag_type(industry.id)
    controller.tags.start_create()
    controller.tags.name = "Draft"
    client.delete(f"/tag-types/{industry.id}")

    controller.refresh()

    assert controller.selected_tag_type is None
    assert controller.tags.mode == "idle"
    assert controller.tags.name == ""
