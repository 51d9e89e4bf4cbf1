from __future__ import annotations

from flask import Flask, request, session

from ..common.api import admin_required, api_view, current_actor, json_body, login_required, ok
from ..common.validators import require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    # -------- Auth --------
    @app.route("/api/signup", methods=["POST"], endpoint="signup")
    @api_view
    def signup():
        data = json_body()
        user_id = container.auth_service.signup(
            username=data.get("username") or "",
            email=data.get("email") or "",
            phone=data.get("phone") or "",
            password=data.get("password") or "",
            user_type=data.get("user_type") or "",
            ip_address=request.remote_addr,
        )
        return ok("User registered successfully. Please verify your email address.", id=user_id)

    @app.route("/api/verify-email", methods=["GET"], endpoint="verify_email")
    @api_view
    def verify_email():
        container.auth_service.verify_email(request.args.get("token", ""), ip_address=request.remote_addr)
        return ok("Email verified successfully. You can now log in.")

    @app.route("/api/login", methods=["POST"], endpoint="login")
    @api_view
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(
            data.get("username") or "",
            data.get("password") or "",
            data.get("user_type") or "",
            ip_address=request.remote_addr,
        )

        session.clear()
        session["user_id"] = s_user.user_id
        session["username"] = s_user.username
        session["user_type"] = s_user.user_type.value
        return ok("Login successful", user=s_user.to_dict())

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    @api_view
    def logout():
        container.auth_service.logout(current_actor())
        session.clear()
        return ok("Logged out")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @api_view
    @login_required
    def me():
        user = container.user_service.get_user(int(session["user_id"]))
        roles = container.role_service.list_roles_for_user(user.user_id)
        permissions = container.role_service.effective_permissions(user.user_id)
        return ok(
            user=user.to_public_dict(),
            roles=[r.to_dict() for r in roles],
            permissions=permissions.to_dict(),
        )

    # -------- Employees (admin) --------
    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @api_view
    @admin_required
    def list_users():
        return ok(employees=container.user_service.list_employees())

    @app.route("/api/add-employee", methods=["POST"], endpoint="add_employee")
    @api_view
    @admin_required
    def add_employee():
        data = json_body()
        role_id = data.get("role_id")
        employee_id = container.user_service.add_employee(
            username=data.get("username") or "",
            password=data.get("password") or "",
            email=data.get("email"),
            phone=data.get("phone"),
            role_id=require_int(role_id, "role_id") if role_id not in (None, "") else None,
            actor=current_actor(),
        )
        return ok("Employee added successfully. Please ask employee to add their biodata.", employeeId=employee_id)

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @api_view
    @admin_required
    def update_user(user_id: int):
        data = json_body()
        container.user_service.update_employee(
            user_id=user_id,
            username=data.get("username") or "",
            password=data.get("password"),
            actor=current_actor(),
        )
        return ok("Employee updated successfully")

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @api_view
    @admin_required
    def delete_user(user_id: int):
        container.user_service.delete_employee(user_id=user_id, actor=current_actor())
        return ok("Employee and related data deleted successfully")
