"""Flask application exposing the allocator as a JSON API."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, current_app, jsonify, render_template_string, request

from ..config import AppConfig, apply_logging
from ..engine.allocator import AllocationError
from ..io.member_loader import member_from_dict
from ..io.task_loader import task_from_dict
from ..store import TaskStore

logger = logging.getLogger(__name__)

REPORT_TEMPLATE = """
<!doctype html>
<title>Allocation Report</title>
{% if report is none %}
<p>No allocation has been run yet.</p>
{% else %}
<h1>Assignments</h1>
<table border="1">
  <tr><th>Task</th><th>Member</th><th>Match Score</th><th>Hours</th><th>Reason</th></tr>
  {% for record in report.assignments %}
    <tr>
      <td>{{ record.task_title }}</td>
      <td>{{ record.member_name }}</td>
      <td>{{ record.match_score }}</td>
      <td>{{ record.estimated_hours }}</td>
      <td>{{ record.reason or '' }}</td>
    </tr>
  {% endfor %}
</table>

<h1>Summary</h1>
<p>
  {{ report.stats.assigned_tasks }} of {{ report.stats.total_tasks }} tasks assigned
  ({{ report.stats.efficiency }}% efficiency, average match {{ report.stats.avg_match_score }})
</p>

<h1>Members</h1>
<table border="1">
  <tr><th>Member</th><th>Workload</th><th>Capacity</th><th>Utilization</th></tr>
  {% for member in report.member_summaries %}
    <tr>
      <td>{{ member.name }}</td>
      <td>{{ member.current_workload }}</td>
      <td>{{ member.max_capacity }}</td>
      <td>{{ member.utilization }}%</td>
    </tr>
  {% endfor %}
</table>
{% endif %}
"""


def _store() -> TaskStore:
    return current_app.config["TASK_STORE"]


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def index():
    return jsonify({"message": "Welcome to Smart Task Allocator API"})


def health():
    return jsonify(
        {
            "message": "Smart Task Allocator API is running!",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )


def list_members():
    return jsonify([member.to_dict() for member in _store().members()])


def create_member():
    payload = request.get_json(silent=True)
    if payload is None:
        return _error("Request body must be a JSON object", 400)
    try:
        member = _store().add_member(member_from_dict(payload))
    except ValueError as exc:
        return _error(str(exc), 400)
    return jsonify(member.to_dict()), 201


def list_tasks():
    return jsonify([task.to_dict() for task in _store().tasks()])


def create_task():
    payload = request.get_json(silent=True)
    if payload is None:
        return _error("Request body must be a JSON object", 400)
    try:
        task = _store().add_task(task_from_dict(payload))
    except ValueError as exc:
        return _error(str(exc), 400)
    return jsonify(task.to_dict()), 201


def allocate():
    try:
        report = _store().run_allocation()
    except AllocationError as exc:
        return _error(str(exc), 500)
    return jsonify(report.to_dict())


def reset():
    store = _store()
    store.reset()
    return jsonify(
        {
            "message": "Workloads and assignments reset",
            "members": [member.to_dict() for member in store.members()],
            "tasks": [task.to_dict() for task in store.tasks()],
        }
    )


def report():
    return render_template_string(REPORT_TEMPLATE, report=_store().last_report)


def create_app(
    store: Optional[TaskStore] = None, config: Optional[AppConfig] = None
) -> Flask:
    """Build the Flask application around ``store``.

    Without an explicit store the configured dataset is loaded, falling back
    to the built-in sample team.
    """
    config = config or AppConfig()
    apply_logging(config)
    if store is None:
        store = TaskStore.from_dataset(config.dataset) if config.dataset else TaskStore.sample()

    app = Flask(__name__)
    app.config["TASK_STORE"] = store
    app.config["APP_CONFIG"] = config

    app.add_url_rule("/", "index", index, methods=["GET"])
    app.add_url_rule("/api/health", "health", health, methods=["GET"])
    app.add_url_rule("/api/members", "list_members", list_members, methods=["GET"])
    app.add_url_rule("/api/members", "create_member", create_member, methods=["POST"])
    app.add_url_rule("/api/tasks", "list_tasks", list_tasks, methods=["GET"])
    app.add_url_rule("/api/tasks", "create_task", create_task, methods=["POST"])
    app.add_url_rule("/api/allocate", "allocate", allocate, methods=["POST"])
    app.add_url_rule("/api/reset", "reset", reset, methods=["POST"])
    app.add_url_rule("/report", "report", report, methods=["GET"])
    return app


if __name__ == "__main__":
    # Bind to all interfaces to allow remote access when running the app directly.
    create_app().run(debug=True, host="0.0.0.0", port=3001)
