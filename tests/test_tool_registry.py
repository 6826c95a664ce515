"""Tests for the pvemcp tool registry.

Covers the tier/category gate, registration, and the execution wrapper
(input validation, error capture, output sanitizing).
"""

import httpx
import pytest
from pydantic import BaseModel, Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.exceptions import PveError
from pvemcp.sanitizer import REDACTED, register_secret
from pvemcp.tools.models import NoInput, ToolAnnotations, ToolDefinition
from pvemcp.tools.registry import ToolRegistry, admit

from conftest import TOKEN_SECRET


class VmArgs(BaseModel):
    node: str = Field(description="The node name")
    vmid: int = Field(description="The VM ID")


async def _ok(client, args):
    return "ok"


def _make_tool(
    name: str = "pve_test_tool",
    tier: AccessTier = AccessTier.READ_ONLY,
    category: ToolCategory = ToolCategory.NODES,
    handler=_ok,
    input_model=NoInput,
    annotations: ToolAnnotations | None = None,
) -> ToolDefinition:
    """Helper to create test tool definitions."""
    return ToolDefinition(
        name=name,
        description=f"Test tool: {name}",
        tier=tier,
        category=category,
        handler=handler,
        input_model=input_model,
        annotations=annotations or ToolAnnotations(),
    )


# ─── Gate ────────────────────────────────────────────────────


class TestAdmit:
    @pytest.mark.parametrize(
        "process_tier,tool_tier,expected",
        [
            (AccessTier.READ_ONLY, AccessTier.READ_ONLY, True),
            (AccessTier.READ_ONLY, AccessTier.READ_EXECUTE, False),
            (AccessTier.READ_ONLY, AccessTier.FULL, False),
            (AccessTier.READ_EXECUTE, AccessTier.READ_ONLY, True),
            (AccessTier.READ_EXECUTE, AccessTier.READ_EXECUTE, True),
            (AccessTier.READ_EXECUTE, AccessTier.FULL, False),
            (AccessTier.FULL, AccessTier.READ_ONLY, True),
            (AccessTier.FULL, AccessTier.READ_EXECUTE, True),
            (AccessTier.FULL, AccessTier.FULL, True),
        ],
    )
    def test_tier_order(self, process_tier, tool_tier, expected):
        assert admit(_make_tool(tier=tool_tier), process_tier) is expected

    def test_empty_category_list_means_no_filter(self):
        tool = _make_tool(category=ToolCategory.HA)
        assert admit(tool, AccessTier.FULL, None)
        assert admit(tool, AccessTier.FULL, [])
        assert admit(tool, AccessTier.FULL, ())

    def test_single_matching_category(self):
        assert admit(_make_tool(category=ToolCategory.STORAGE), AccessTier.FULL, ["storage"])

    def test_category_filter_overrides_tier(self):
        tool = _make_tool(tier=AccessTier.READ_ONLY, category=ToolCategory.NETWORK)
        assert not admit(tool, AccessTier.FULL, ["storage"])

    def test_both_conditions_required(self):
        tool = _make_tool(tier=AccessTier.FULL, category=ToolCategory.STORAGE)
        assert not admit(tool, AccessTier.READ_ONLY, ["storage"])


# ─── Registration ────────────────────────────────────────────


class TestToolRegistration:
    def test_register_tool(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.FULL)
        assert registry.register(_make_tool("pve_a")) is True
        assert "pve_a" in registry
        assert len(registry) == 1

    def test_register_duplicate_raises(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_a"))
        with pytest.raises(ValueError, match="already registered"):
            registry.register(_make_tool("pve_a"))

    def test_read_only_process_skips_full_tool(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.READ_ONLY)
        assert registry.register(_make_tool("pve_delete_x", tier=AccessTier.FULL)) is False
        assert "pve_delete_x" not in registry
        assert len(registry) == 0

    def test_category_filter_skips_other_category(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.FULL, ["storage"])
        tool = _make_tool("pve_list_networks", category=ToolCategory.NETWORK)
        assert registry.register(tool) is False
        assert registry.get("pve_list_networks") is None

    def test_register_all_counts_admitted(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.READ_EXECUTE)
        count = registry.register_all([
            _make_tool("pve_a", tier=AccessTier.READ_ONLY),
            _make_tool("pve_b", tier=AccessTier.READ_EXECUTE),
            _make_tool("pve_c", tier=AccessTier.FULL),
        ])
        assert count == 2
        assert [t.name for t in registry.get_all()] == ["pve_a", "pve_b"]

    def test_properties(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.READ_ONLY, ["qemu", "lxc"])
        assert registry.tier is AccessTier.READ_ONLY
        assert registry.categories == ("qemu", "lxc")
        assert ToolRegistry(fake_client, AccessTier.FULL, []).categories is None

    def test_registered_tool_metadata(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_a", tier=AccessTier.READ_EXECUTE, category=ToolCategory.QEMU))
        tool = registry.get("pve_a")
        assert tool.tier is AccessTier.READ_EXECUTE
        assert tool.category == "qemu"


# ─── Execution wrapper ───────────────────────────────────────


class TestExecution:
    async def test_success(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_a"))
        result = await registry.execute("pve_a", {})
        assert result.is_error is False
        assert result.content == "ok"

    async def test_validated_arguments_reach_handler(self, fake_client):
        seen = {}

        async def handler(client, args):
            seen["client"] = client
            seen["args"] = args
            return f"VM {args.vmid} on {args.node}"

        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_vm", handler=handler, input_model=VmArgs))
        result = await registry.execute("pve_vm", {"node": "pve1", "vmid": "100"})
        assert result.content == "VM 100 on pve1"
        assert seen["client"] is fake_client
        assert seen["args"].vmid == 100

    async def test_none_arguments_treated_as_empty(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_a"))
        assert (await registry.execute("pve_a", None)).is_error is False

    async def test_invalid_input_is_error_result(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_vm", input_model=VmArgs))
        result = await registry.execute("pve_vm", {"node": "pve1"})
        assert result.is_error is True
        assert result.content.startswith("Invalid input for tool 'pve_vm'")
        assert "vmid" in result.content

    async def test_unknown_tool(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.FULL)
        result = await registry.execute("pve_nope", {})
        assert result.is_error is True
        assert result.content == "Unknown tool: pve_nope"

    async def test_filtered_tool_is_unknown(self, fake_client):
        registry = ToolRegistry(fake_client, AccessTier.READ_ONLY)
        registry.register(_make_tool("pve_delete_x", tier=AccessTier.FULL))
        result = await registry.execute("pve_delete_x", {})
        assert result.is_error is True

    async def test_handler_exception_captured(self, fake_client):
        async def handler(client, args):
            raise PveError("GET /nodes failed: 500 Internal Server Error", status_code=500)

        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_a", handler=handler))
        result = await registry.execute("pve_a", {})
        assert result.is_error is True
        assert result.content == "GET /nodes failed: 500 Internal Server Error"

    async def test_secret_in_exception_redacted(self, fake_client):
        register_secret(TOKEN_SECRET)

        async def handler(client, args):
            raise RuntimeError(f"backend echoed {TOKEN_SECRET}")

        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_a", handler=handler))
        result = await registry.execute("pve_a", {})
        assert result.is_error is True
        assert TOKEN_SECRET not in result.content
        assert result.content == f"backend echoed {REDACTED}"

    async def test_secret_in_success_output_redacted(self, fake_client):
        register_secret(TOKEN_SECRET)

        async def handler(client, args):
            return f"config: token={TOKEN_SECRET}"

        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_a", handler=handler))
        result = await registry.execute("pve_a", {})
        assert TOKEN_SECRET not in result.content

    async def test_empty_exception_message_uses_class_name(self, fake_client):
        async def handler(client, args):
            raise KeyError

        registry = ToolRegistry(fake_client, AccessTier.FULL)
        registry.register(_make_tool("pve_a", handler=handler))
        result = await registry.execute("pve_a", {})
        assert result.content == "KeyError"

    async def test_auth_failure_returned_not_raised(self, make_client):
        client = make_client(lambda request: httpx.Response(403))

        async def handler(client, args):
            return await client.get("/nodes")

        registry = ToolRegistry(client, AccessTier.FULL)
        registry.register(_make_tool("pve_list_nodes", handler=handler))
        result = await registry.execute("pve_list_nodes", {})
        assert result.is_error is True
        assert "Authentication failed" in result.content

    async def test_timeout_returned_as_connectivity_failure(self, make_client):
        def transport(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        async def handler(client, args):
            return await client.get("/nodes")

        registry = ToolRegistry(make_client(transport), AccessTier.FULL)
        registry.register(_make_tool("pve_list_nodes", handler=handler))
        result = await registry.execute("pve_list_nodes", {})
        assert result.is_error is True
        assert result.content.startswith("Cannot reach Proxmox VE")


# ─── Definition metadata ─────────────────────────────────────


class TestToolDefinition:
    def test_read_only_hint_defaults_from_tier(self):
        assert _make_tool(tier=AccessTier.READ_ONLY).read_only_hint is True
        assert _make_tool(tier=AccessTier.READ_EXECUTE).read_only_hint is False
        assert _make_tool(tier=AccessTier.FULL).read_only_hint is False

    def test_read_only_hint_override(self):
        tool = _make_tool(tier=AccessTier.FULL, annotations=ToolAnnotations(read_only=True))
        assert tool.read_only_hint is True

    def test_destructive_hint_defaults_false(self):
        assert _make_tool(tier=AccessTier.FULL).destructive_hint is False
        tool = _make_tool(annotations=ToolAnnotations(destructive=True))
        assert tool.destructive_hint is True

    def test_input_schema(self):
        schema = _make_tool(input_model=VmArgs).input_schema
        assert schema["type"] == "object"
        assert set(schema["properties"]) == {"node", "vmid"}
        assert schema["required"] == ["node", "vmid"]
        assert "title" not in schema

    def test_no_input_schema_has_properties(self):
        schema = _make_tool().input_schema
        assert schema["type"] == "object"
        assert schema["properties"] == {}
