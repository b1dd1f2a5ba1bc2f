from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import admin_required, json_body, ok, read_or_empty
from ..core.exceptions import AuthenticationError
from ..container import Container
from ..workspace.registry import SESSION_KEY


def current_session() -> dict:
    if "user_id" not in session:
        raise AuthenticationError("Not logged in")
    return {
        "id": session["user_id"],
        "username": session.get("username"),
        "role": session.get("role"),
        "menus": list(session.get("menus") or []),
    }


def _menus_arg(data: dict):
    # Accept the camelCase key older clients send.
    return data.get("custom_menus", data.get("customMenus"))


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("username"), data.get("password"))

        container.workspaces.drop(session.get(SESSION_KEY))
        session.clear()
        session.permanent = True
        session["user_id"] = user.user_id
        session["username"] = user.username
        session["role"] = user.role.value
        session["menus"] = list(user.menus)
        return ok("Login successful", user=user.as_dict())

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.workspaces.drop(session.get(SESSION_KEY))
        session.clear()
        return ok("Logout successful")

    @app.route("/api/session", methods=["GET"], endpoint="session_info")
    def session_info():
        return jsonify({"authenticated": True, "user": current_session()})

    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_account():
        data = json_body()
        user_id = container.user_service.register(username=data.get("username"), password=data.get("password"))
        return ok("Registration successful", 201, id=user_id)

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    def users_list():
        users = read_or_empty(container.user_service.list_users, [], "users")
        return jsonify([u.as_public_dict() for u in users])

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    def users_create():
        data = json_body()
        user_id = container.user_service.create_user(
            username=data.get("username"),
            password=data.get("password"),
            role=data.get("role") or "vhiuser",
            custom_menus=_menus_arg(data),
        )
        return ok("User created successfully", 201, id=user_id)

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="users_update")
    @admin_required
    def users_update(user_id: int):
        data = json_body()
        container.user_service.update_user(
            user_id=user_id,
            username=data.get("username"),
            role=data.get("role"),
            password=data.get("password"),
            custom_menus=_menus_arg(data),
        )
        return ok("User updated successfully")

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    def users_delete(user_id: int):
        container.user_service.delete_user(current_user_id=int(session["user_id"]), user_id=user_id)
        return ok("User deleted successfully")
