"""Task tools: list, status, log and stop for PVE background tasks."""

from __future__ import annotations

from pydantic import Field

from pvemcp.core.models import AccessTier, ToolCategory
from pvemcp.tools.catalog._common import NodeInput, action_tool, read_tool

TASKS = ToolCategory.TASKS


class TaskListInput(NodeInput):
    start: int | None = Field(default=None, description="Start index (default: 0)")
    limit: int | None = Field(
        default=None, description="Max number of tasks to return (default: 50)"
    )
    vmid: int | None = Field(default=None, description="Filter by VMID")
    typefilter: str | None = Field(
        default=None, description="Filter by task type (e.g. qmstart, vzdump)"
    )


class TaskInput(NodeInput):
    upid: str = Field(description="The task UPID")


class TaskLogInput(TaskInput):
    start: int | None = Field(default=None, description="Start line number (default: 0)")
    limit: int | None = Field(
        default=None, description="Max number of log lines to return (default: 50)"
    )


TASK_TOOLS = [
    read_tool(
        "pve_list_tasks",
        "List recent tasks on a node with optional filters for status, source, and VMID",
        TASKS,
        "/nodes/{node}/tasks",
        TaskListInput,
        params=("start", "limit", "vmid", "typefilter"),
    ),
    read_tool(
        "pve_get_task_status",
        "Get the status of a specific task by its UPID",
        TASKS,
        "/nodes/{node}/tasks/{upid}/status",
        TaskInput,
    ),
    read_tool(
        "pve_get_task_log",
        "Get the log output of a specific task by its UPID",
        TASKS,
        "/nodes/{node}/tasks/{upid}/log",
        TaskLogInput,
        params=("start", "limit"),
    ),
    action_tool(
        "pve_stop_task",
        "Stop a running task by its UPID",
        TASKS,
        AccessTier.READ_EXECUTE,
        "DELETE",
        "/nodes/{node}/tasks/{upid}",
        "Task {upid} stop requested on node {node}.",
        TaskInput,
    ),
]
