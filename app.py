# app.py
# Provides a minimal Flask-based REST API over a single timetable Planner.

from flask import Flask, Response, jsonify, request

from csv_export import csv_filename
from errors import PlannerError, PlannerInputError, status_for
from graph_feed import build_graph_feed, color_for_index
from logger import logger
from planner import Planner
from schedule_finder import canonical_key
from time_model import format_time, make_session


def course_json(index, course):
    return {
        "index": index,
        "id": course.id,
        "name": course.name,
        "faculty": course.faculty,
        "sessions": [session_json(s) for s in course.sessions],
        "color": color_for_index(index),
    }


def session_json(session):
    return {"day": str(session.day), "start": format_time(session.start), "end": format_time(session.end)}


def results_json(planner):
    snap = planner.snapshot()
    return {
        "selectedIndex": snap.selected_index,
        "timetables": [
            {
                "rank": i + 1,
                "size": len(s),
                "key": canonical_key(s),
                "courses": [
                    {"index": ci, "id": snap.courses[ci].id, "name": snap.courses[ci].name}
                    for ci in sorted(s)
                ],
            }
            for i, s in enumerate(snap.results)
        ],
    }


def json_body():
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        raise PlannerInputError("request body must be a JSON object")
    return body


def text_field(body, key):
    # JSON numbers and nulls are tolerated for text fields; nested values are not.
    value = body.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise PlannerInputError(f"{key} must be a string")
    return str(value)


def create_app(planner=None):
    app = Flask(__name__)
    planner = planner if planner is not None else Planner()
    app.config["PLANNER"] = planner

    @app.errorhandler(PlannerError)
    def handle_planner_error(e):
        # Validation errors are the caller's problem; anything else is ours.
        if isinstance(e, PlannerInputError):
            logger.warning("Rejected request %s %s: %s", request.method, request.path, e)
        else:
            logger.error("Invariant failure on %s %s: %s", request.method, request.path, e)
        return jsonify({"error": str(e)}), status_for(e)

    @app.get("/api/courses")
    def api_courses():
        # Returns the course list, optionally filtered by ID, name or faculty.
        return jsonify([course_json(i, c) for i, c in planner.filter_courses(request.args.get("q", ""))])

    @app.post("/api/courses")
    def api_add_course():
        # Adds a course from its own "sessions" list, or from the pending draft.
        body = json_body()
        raw_sessions = body.get("sessions")
        sessions = None
        if raw_sessions is not None:
            if not isinstance(raw_sessions, list):
                return jsonify({"error": "sessions must be a list"}), 400
            sessions = [parse_session(s) for s in raw_sessions]

        index, course = planner.add_course(
            text_field(body, "id"), text_field(body, "name"), text_field(body, "faculty"), sessions,
        )
        return jsonify(course_json(index, course)), 201

    @app.delete("/api/courses/<int:index>")
    def api_remove_course(index):
        removed = planner.remove_course(index)
        return jsonify({"removed": removed.id, "courses": len(planner.courses)})

    @app.delete("/api/courses")
    def api_clear():
        planner.clear()
        return jsonify({"courses": 0})

    @app.get("/api/draft")
    def api_draft():
        return jsonify([session_json(s) for s in planner.draft])

    @app.post("/api/draft/sessions")
    def api_add_session():
        body = json_body()
        planner.add_session(body.get("day"), body.get("start"), body.get("end"))
        return jsonify([session_json(s) for s in planner.draft]), 201

    @app.delete("/api/draft/sessions/<int:index>")
    def api_remove_session(index):
        planner.remove_session(index)
        return jsonify([session_json(s) for s in planner.draft])

    @app.delete("/api/draft")
    def api_reset_draft():
        planner.reset_draft()
        return jsonify([])

    @app.post("/api/compute")
    def api_compute():
        planner.compute()
        return jsonify(results_json(planner))

    @app.get("/api/results")
    def api_results():
        return jsonify(results_json(planner))

    @app.put("/api/selection")
    def api_select():
        body = json_body()
        planner.select(body.get("index"))
        return jsonify(results_json(planner))

    @app.get("/api/graph")
    def api_graph():
        return jsonify(build_graph_feed(planner.snapshot()))

    @app.get("/api/results/<int:rank>/csv")
    def api_csv(rank):
        text = planner.export_csv(rank)
        return Response(
            text,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={csv_filename(rank)}"},
        )

    return app


def parse_session(raw):
    # Validates one {"day", "start", "end"} object from a request body.
    if not isinstance(raw, dict):
        raise PlannerInputError("each session must be an object with day, start and end")
    return make_session(raw.get("day"), raw.get("start"), raw.get("end"))


if __name__ == "__main__":
    # Start the development server with an empty planner.
    create_app().run(debug=True)
