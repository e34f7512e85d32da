"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from flask import Blueprint, Flask, render_template

TEMPLATES = {
    "posts/index.html": "{% for post in posts %}<li>{{ post }}</li>{% endfor %}{{ header|safe }}",
    "posts/show.html": "<h1>{{ post }}</h1>",
    "partials/header.html": "<header>{{ title }}</header>",
}


def _build_blueprint() -> Blueprint:
    bp = Blueprint("posts", __name__)

    @bp.route("/posts")
    def index():
        return render_template("posts/index.html", posts=["first", "second"], header="")

    @bp.route("/posts/<int:post_id>")
    def show(post_id: int):
        return render_template("posts/show.html", post=f"post {post_id}")

    @bp.route("/posts/with-header")
    def with_header():
        header = render_template("partials/header.html", title="Posts")
        return render_template("posts/index.html", posts=[], header=header)

    @bp.route("/ping")
    def ping():
        return "pong"

    @bp.route("/posts", methods=["POST"])
    def create():
        return render_template("posts/show.html", post="created"), 201

    return bp


@pytest.fixture()
def app(tmp_path):
    """Create a Flask test app with templates on disk."""
    tmpl_dir = tmp_path / "templates"
    for name, body in TEMPLATES.items():
        path = tmpl_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body)

    app = Flask(__name__, template_folder=str(tmpl_dir))
    app.config.update({"TESTING": True})
    app.register_blueprint(_build_blueprint())
    return app


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()
