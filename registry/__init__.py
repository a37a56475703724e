# -*- coding: utf-8 -*-
from mcp_gateway.server import mcp as gateway_mcp

# Server registry mapping server names to MCP instances
# Reminder and onboarding tools are both served through the MCP Gateway
SERVER_REGISTRY = {
    "reminder_server": gateway_mcp,
    "onboarding_server": gateway_mcp,
}

# Map tool names to the area of the planner service they belong to
TOOL_SERVICE_MAPPING = {
    "create_reminder": "reminder_server",
    "list_reminders": "reminder_server",
    "list_upcoming_reminders": "reminder_server",
    "list_overdue_reminders": "reminder_server",
    "complete_reminder": "reminder_server",
    "delete_reminder": "reminder_server",
    "show_reminders": "reminder_server",
    "list_onboarding_questions": "onboarding_server",
    "get_onboarding_status": "onboarding_server",
    "complete_onboarding": "onboarding_server",
    "get_gateway_info": "gateway",
}


async def list_tool_schemas() -> list[dict]:
    """Collect and return JSON schemas of all available tools from the gateway."""
    schemas = []

    all_tools = await gateway_mcp.get_tools()

    for tool_key, tool in all_tools.items():
        server_name = TOOL_SERVICE_MAPPING.get(tool_key, "unknown_server")

        schemas.append({
            "server": server_name,
            "name": tool_key,
            "title": tool.title or tool_key,
            "description": tool.description or "",
            "inputSchema": tool.parameters or {},
            "outputSchema": tool.output_schema or {},
        })

    return schemas
