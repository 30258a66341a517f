import pytest
from pydantic import BaseModel

from user_post_api.app.core.errors import InternalError, NotFoundError, ValidationError
from user_post_api.app.services import assistant_catalog
from user_post_api.app.services.assistant_registry import CapabilityRegistry, RegistrationError
from user_post_api.app.services.user_service import UserService


class Numbers(BaseModel):
    a: int
    b: int


class Total(BaseModel):
    total: int


def add(args: Numbers) -> dict:
    return {"total": args.a + args.b}


# -- registry ----------------------------------------------------------------

def test_register_and_invoke_sync_tool(run):
    registry = CapabilityRegistry()
    descriptor = registry.register_tool("add", "Adds two numbers", add, Numbers, Total)
    assert descriptor.kind == "tool"
    assert run(registry.invoke_tool("add", {"a": 2, "b": 3})) == {"total": 5}


def test_invoke_async_tool_returning_model(run):
    async def double(args: Numbers) -> Total:
        return Total(total=(args.a + args.b) * 2)

    registry = CapabilityRegistry()
    registry.register_tool("double", "Doubles a sum", double, Numbers, Total)
    assert run(registry.invoke_tool("double", {"a": 1, "b": 1})) == {"total": 4}


@pytest.mark.parametrize("name", ["", "1tool", "has space", "dash-name", None])
def test_rejects_bad_names(name):
    with pytest.raises(RegistrationError):
        CapabilityRegistry().register_tool(name, "desc", add, Numbers, Total)


def test_rejects_duplicates_per_kind():
    registry = CapabilityRegistry()
    registry.register_tool("add", "desc", add, Numbers, Total)
    with pytest.raises(RegistrationError):
        registry.register_tool("add", "desc", add, Numbers, Total)
    # components live in their own namespace
    registry.register_component("add", "desc", Numbers)
    with pytest.raises(RegistrationError):
        registry.register_component("add", "desc", Numbers)


def test_rejects_invalid_descriptors():
    registry = CapabilityRegistry()
    with pytest.raises(RegistrationError):
        registry.register_tool("t", "   ", add, Numbers, Total)
    with pytest.raises(RegistrationError):
        registry.register_tool("t", "desc", "not callable", Numbers, Total)
    with pytest.raises(RegistrationError):
        registry.register_tool("t", "desc", add, dict, Total)
    with pytest.raises(RegistrationError):
        registry.register_tool("t", "desc", add, Numbers, Total(total=1))
    with pytest.raises(RegistrationError):
        registry.register_component("c", "desc", object)


def test_invalid_arguments_raise_validation_error(run):
    registry = CapabilityRegistry()
    registry.register_tool("add", "desc", add, Numbers, Total)
    with pytest.raises(ValidationError) as exc:
        run(registry.invoke_tool("add", {"a": "x", "b": 1}))
    assert exc.value.message.startswith("a:")


def test_invalid_output_is_internal_error(run):
    registry = CapabilityRegistry()
    registry.register_tool("broken", "desc", lambda args: {"sum": 1}, Numbers, Total)
    with pytest.raises(InternalError):
        run(registry.invoke_tool("broken", {"a": 1, "b": 1}))


def test_unknown_capabilities(run):
    registry = CapabilityRegistry()
    with pytest.raises(NotFoundError):
        run(registry.invoke_tool("nope"))
    with pytest.raises(NotFoundError):
        registry.validate_component_props("nope", {})


# -- catalog -----------------------------------------------------------------

def test_catalog_contents():
    registry = assistant_catalog.build_registry()
    assert [tool["name"] for tool in registry.describe_tools()] == ["getUsersData"]
    assert [c["name"] for c in registry.describe_components()] == ["BarChart", "AddUserForm"]


def test_get_users_data_failure_is_reported_in_data(run, monkeypatch):
    async def unavailable():
        raise InternalError("Failed to fetch users")

    monkeypatch.setattr(UserService, "list_users", staticmethod(unavailable))
    result = run(assistant_catalog.registry.invoke_tool("getUsersData", {}))
    assert result == {"data": [], "title": "Error", "description": "Failed to fetch data"}


# -- endpoints ---------------------------------------------------------------

def test_list_tools_endpoint(client):
    response = client.get("/api/v1/assistant/tools")
    assert response.status_code == 200
    (tool,) = response.json()
    assert tool["name"] == "getUsersData"
    assert "data" in tool["output_schema"]["properties"]
    assert tool["input_schema"]["type"] == "object"


def test_invoke_get_users_data(client):
    client.post("/api/v1/users/", json={"email": "ann@b.co", "name": "Ann", "post": {"title": "One"}})
    client.post("/api/v1/users/", json={"email": "nameless@b.co"})

    response = client.post("/api/v1/assistant/tools/getUsersData", json={})
    assert response.status_code == 200
    assert response.json() == {
        "tool": "getUsersData",
        "result": {
            "data": [{"User": "Ann", "Posts": 1}, {"User": "nameless@b.co", "Posts": 0}],
            "title": "User Posts Summary",
            "description": "Total posts per user",
        },
    }


def test_invoke_unknown_tool(client):
    response = client.post("/api/v1/assistant/tools/dropTables", json={})
    assert response.status_code == 404
    assert response.json() == {"error": "Unknown tool: dropTables"}


def test_list_components_endpoint(client):
    response = client.get("/api/v1/assistant/components")
    names = [component["name"] for component in response.json()]
    assert names == ["BarChart", "AddUserForm"]


def test_render_bar_chart(client):
    props = {"data": [{"User": "Ann", "Posts": 2}], "title": "Posts"}
    response = client.post("/api/v1/assistant/components/BarChart", json=props)
    assert response.status_code == 200
    assert response.json() == {
        "component": "BarChart",
        "props": {"data": [{"User": "Ann", "Posts": 2}], "title": "Posts", "description": None},
    }


def test_render_bar_chart_with_bad_props(client):
    response = client.post("/api/v1/assistant/components/BarChart", json={"title": "no data"})
    assert response.status_code == 400
    assert "data" in response.json()["error"]


def test_render_add_user_form_without_props(client):
    response = client.post("/api/v1/assistant/components/AddUserForm")
    assert response.status_code == 200
    assert response.json() == {"component": "AddUserForm", "props": {}}
