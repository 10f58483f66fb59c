"""Table API for ``todos``.

Rows are read and written through PostgREST: filters are query parameters of
the form ``column=op.value``.
"""

from typing import Any

from chomper.api.client import APIClient

TODOS_PATH = "/rest/v1/todos"


class TodosAPI:
    """Todos table client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_todos(self, user_id: str) -> list[dict]:
        """List every row owned by a user, newest first."""
        response = await self.client.get(
            TODOS_PATH,
            params={
                "select": "*",
                "user_id": f"eq.{user_id}",
                "order": "created_at.desc",
            },
        )
        return response.json()

    async def insert_todo(self, row: dict[str, Any]) -> dict:
        """Insert a row and return it as stored."""
        response = await self.client.post(
            TODOS_PATH,
            json=[row],
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        return rows[0] if isinstance(rows, list) else rows

    async def update_todo(self, todo_id: str, changes: dict[str, Any]) -> None:
        """Update the given columns of one row."""
        await self.client.patch(
            TODOS_PATH, json=changes, params={"id": f"eq.{todo_id}"}
        )

    async def delete_todo(self, todo_id: str) -> None:
        """Delete one row."""
        await self.client.delete(TODOS_PATH, params={"id": f"eq.{todo_id}"})

    async def delete_todos(self, todo_ids: list[str]) -> None:
        """Delete several rows in one call."""
        if not todo_ids:
            return
        await self.client.delete(
            TODOS_PATH, params={"id": f"in.({','.join(todo_ids)})"}
        )
