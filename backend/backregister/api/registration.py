"""Registration page: form rendering and submission."""

from __future__ import annotations

from flask import Blueprint

from backregister.api.deps import get_registration_service, raw_form_fields, timing
from backregister.api.rendering import render_page
from backregister.schemas import RegistrationFormSchema

bp = Blueprint("registration", __name__)

form_schema = RegistrationFormSchema()


@bp.get("/")
@timing
def form():
    """Render the empty registration form."""

    return render_page()


@bp.post("/")
@timing
def submit():
    """Run the registration pipeline for the posted form."""

    data = form_schema.load(raw_form_fields())
    result = get_registration_service().submit(data["username"], data["password"])
    return render_page(result.notice, status=result.status_code)
