"""
Todo items with labels, stored in memory or in a relational database.

Quick start:
    from todolabels.repositories import get_repositories
    from todolabels.schemas import CreateTodo, validate_payload

    repos = get_repositories()
    cmd = validate_payload(CreateTodo, request_body)
    todo = await repos.todos.create(cmd)
"""

__version__ = "0.1.0"
