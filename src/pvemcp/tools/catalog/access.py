"""Access tools: users, groups, roles, ACLs and authentication domains."""

from __future__ import annotations

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import PveInput, action_tool, read_tool

ACCESS = ToolCategory.ACCESS


class UserListInput(PveInput):
    enabled: bool | None = Field(default=None, description="Filter by enabled status")


class UserInput(PveInput):
    userid: str = Field(description="The user ID (e.g. root@pam, user@pve)")


class UserFields(UserInput):
    email: str | None = Field(default=None, description="User email address")
    firstname: str | None = Field(default=None, description="First name")
    lastname: str | None = Field(default=None, description="Last name")
    groups: str | None = Field(default=None, description="Comma-separated list of groups")
    comment: str | None = Field(default=None, description="User comment")
    enable: bool | None = Field(default=None, description="Enable or disable the user")
    expire: int | None = Field(
        default=None, description="Account expiration date (Unix epoch, 0 = never)"
    )


class UserCreateInput(UserFields):
    userid: str = Field(description="The user ID in format user@realm (e.g. john@pve)")
    password: str | None = Field(default=None, description="User password")
    enable: bool | None = Field(default=None, description="Enable the user (default: true)")


class AclUpdateInput(PveInput):
    path: str = Field(description="ACL path (e.g. /, /vms/100, /storage/local)")
    roles: str = Field(description="Comma-separated list of roles to assign")
    users: str | None = Field(default=None, description="Comma-separated list of user IDs")
    groups: str | None = Field(default=None, description="Comma-separated list of group IDs")
    propagate: bool | None = Field(
        default=None, description="Propagate ACL to child objects (default: true)"
    )
    delete: bool | None = Field(
        default=None, description="Remove the ACL entry instead of adding"
    )


ACCESS_TOOLS = [
    # Read-only
    read_tool(
        "pve_list_users",
        "List all users in the PVE access control system",
        ACCESS,
        "/access/users",
        UserListInput,
        params=("enabled",),
    ),
    read_tool(
        "pve_get_user",
        "Get detailed information about a specific user",
        ACCESS,
        "/access/users/{userid}",
        UserInput,
    ),
    read_tool("pve_list_roles", "List all available roles and their privileges", ACCESS, "/access/roles"),
    read_tool("pve_list_groups", "List all user groups", ACCESS, "/access/groups"),
    read_tool("pve_list_acls", "List all access control list entries", ACCESS, "/access/acl"),
    read_tool(
        "pve_list_domains",
        "List all authentication domains/realms (e.g. pam, pve, ldap, ad)",
        ACCESS,
        "/access/domains",
    ),
    # Full
    action_tool(
        "pve_create_user",
        "Create a new user in the PVE access control system",
        ACCESS,
        AccessTier.FULL,
        "POST",
        "/access/users",
        "User '{userid}' created successfully.",
        UserCreateInput,
    ),
    action_tool(
        "pve_update_user",
        "Update an existing user's properties",
        ACCESS,
        AccessTier.FULL,
        "PUT",
        "/access/users/{userid}",
        "User '{userid}' updated successfully.",
        UserFields,
    ),
    action_tool(
        "pve_delete_user",
        "Delete a user from the PVE access control system",
        ACCESS,
        AccessTier.FULL,
        "DELETE",
        "/access/users/{userid}",
        "User '{userid}' deleted successfully.",
        UserInput,
        destructive=True,
    ),
    action_tool(
        "pve_update_acl",
        "Update access control list: grant or revoke roles for users/groups on specific paths",
        ACCESS,
        AccessTier.FULL,
        "PUT",
        "/access/acl",
        "ACL updated successfully for path '{path}'.",
        AclUpdateInput,
    ),
]
