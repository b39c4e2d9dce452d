"""
Function definitions exposed to the realtime voice agent.

The agent receives these with its session and calls back into
``/api/ai-agent/tool/<name>/`` with the arguments it chose.
"""


def _order_lines_schema(description):
    return {
        "type": "array",
        "description": description,
        "items": {
            "type": "object",
            "properties": {
                "menuItemId": {
                    "type": "number",
                    "description": "Menu item id from the knowledge base",
                },
                "quantity": {
                    "type": "number",
                    "description": "How many portions the guest wants",
                },
            },
            "required": ["menuItemId", "quantity"],
        },
    }


RESTAURANT_ID = {
    "type": "number",
    "description": "Restaurant id, identified from the conversation",
}
TABLE_ID = {
    "type": "number",
    "description": "Table id (NOT the table number; look it up in the table list)",
}
ORDER_ID = {
    "type": "number",
    "description": "Id of an order previously created at this table",
}


TOOL_DEFINITIONS = [
    {
        "type": "function",
        "name": "create_order",
        "description": "Create a new order for the guest's table",
        "parameters": {
            "type": "object",
            "properties": {
                "restaurantId": RESTAURANT_ID,
                "tableId": TABLE_ID,
                "items": _order_lines_schema("Items the guest ordered"),
            },
            "required": ["restaurantId", "tableId", "items"],
        },
    },
    {
        "type": "function",
        "name": "add_items_to_order",
        "description": "Add items to an existing open order",
        "parameters": {
            "type": "object",
            "properties": {
                "restaurantId": RESTAURANT_ID,
                "tableId": TABLE_ID,
                "orderId": ORDER_ID,
                "items": _order_lines_schema("Items to add"),
            },
            "required": ["restaurantId", "tableId", "orderId", "items"],
        },
    },
    {
        "type": "function",
        "name": "get_order",
        "description": "Read back an order with its items and total",
        "parameters": {
            "type": "object",
            "properties": {
                "restaurantId": RESTAURANT_ID,
                "tableId": TABLE_ID,
                "orderId": ORDER_ID,
            },
            "required": ["restaurantId", "tableId", "orderId"],
        },
    },
    {
        "type": "function",
        "name": "cancel_order",
        "description": "Cancel an order the guest no longer wants",
        "parameters": {
            "type": "object",
            "properties": {
                "restaurantId": RESTAURANT_ID,
                "tableId": TABLE_ID,
                "orderId": ORDER_ID,
            },
            "required": ["restaurantId", "tableId", "orderId"],
        },
    },
]

TOOL_NAMES = [tool["name"] for tool in TOOL_DEFINITIONS]
