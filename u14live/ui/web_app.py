"""
Web application module for the U14 Live match tracker.

This module contains the Flask server exposing JSON API endpoints for the
three steps of a match: the sheet (squad and starting XI), live tracking
(clock and substitutions) and the export.
"""
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, Response, jsonify, request

from ..exceptions import (
    ConfirmationRequiredError, MissingPrerequisiteError, SheetValidationError, U14LiveError
)
from ..models import MatchSheet
from ..services import LiveMatchService, ManualClockDriver, ServiceFactory
from ..utils import (
    DEFAULT_DATA_DIR, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_ROSTER_PATH, fmt_mmss
)

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Owns the services and the clock driver. The browser delivers one tick
    per second through the API while the clock runs.
    """

    def __init__(self, factory: ServiceFactory):
        self.factory = factory
        self.roster = factory.roster
        self.sheet_service = factory.create_sheet_service()
        self.export_service = factory.get_export_service()
        self.driver = ManualClockDriver()
        self.live: Optional[LiveMatchService] = None

    def open_live(self, match_id: Optional[int] = None) -> LiveMatchService:
        """Open live tracking, pausing any match that was open before."""
        if self.live is not None:
            self.live.pause_clock()
        self.live = None
        self.live = self.factory.open_live_match(match_id, driver=self.driver)
        return self.live

    def require_live(self) -> LiveMatchService:
        """Return the open match, opening the last used one if needed."""
        if self.live is None:
            return self.open_live()
        return self.live

    def drop_live(self, match_id: int) -> None:
        if self.live is not None and self.live.state.match_id == match_id:
            self.live.clock.pause()
            self.live = None


def _error_response(error: Exception) -> Tuple[Response, int]:
    """Map a tracker error to a JSON error response."""
    if isinstance(error, MissingPrerequisiteError):
        return jsonify({"success": False, "error": str(error), "redirect": error.redirect}), 409
    if isinstance(error, ConfirmationRequiredError):
        return jsonify({"success": False, "error": str(error), "confirm_required": True}), 409
    if isinstance(error, SheetValidationError):
        return jsonify({"success": False, "error": str(error), "errors": error.errors}), 400
    return jsonify({"success": False, "error": str(error)}), 400


def _storage_error(error: OSError) -> Tuple[Response, int]:
    logger.error("Could not save match data: %s", error)
    return jsonify({"success": False, "error": f"Could not save match data: {error}"}), 500


def _json_body() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def create_app(
    data_dir: str = DEFAULT_DATA_DIR,
    roster_path: str = DEFAULT_ROSTER_PATH,
    factory: Optional[ServiceFactory] = None,
) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        data_dir: Directory where match documents are stored
        roster_path: JSON roster file
        factory: Pre-built service factory (overrides the two paths)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app_state = WebAppState(factory or ServiceFactory.from_paths(data_dir, roster_path))
    app.config["APP_STATE"] = app_state

    # ==================== View builders ==================== #

    def _build_sheet_data(sheet: MatchSheet) -> dict:
        players = []
        for player in app_state.roster.sorted_by_name():
            players.append({
                "id": player.id,
                "name": player.name,
                "selected": player.id in sheet.selected,
                "xi": player.id in sheet.xi,
            })
        return {
            "sheet": sheet.to_json(),
            "selected_count": len(sheet.selected),
            "xi_count": len(sheet.xi),
            "players": players,
            "errors": app_state.sheet_service.validate_sheet_data(sheet),
        }

    def _build_player_cards(live: LiveMatchService, player_ids: List[int]) -> List[dict]:
        cards = []
        for player in app_state.roster.sorted_by_name(player_ids):
            seconds = live.live_seconds(player.id)
            cards.append({
                "id": player.id,
                "name": player.name,
                "seconds": seconds,
                "time": fmt_mmss(seconds),
            })
        return cards

    def _build_live_data(live: LiveMatchService) -> dict:
        state = live.state
        pending = None
        if live.pending is not None:
            out_name = app_state.roster.name_of(live.pending.out_id)
            in_name = app_state.roster.name_of(live.pending.in_id)
            pending = {
                "out_id": live.pending.out_id,
                "in_id": live.pending.in_id,
                "text": f"{out_name} -> {in_name} (at {fmt_mmss(state.current_time)})?",
            }
        hint = "Pick the incoming player on the bench" if live.selected_out_id else "Select an outgoing player"
        return {
            "match_id": state.match_id,
            "opponent": state.meta.opponent,
            "half": state.half,
            "current_time": state.current_time,
            "clock": fmt_mmss(state.current_time),
            "is_running": state.is_running,
            "finished": state.finished,
            "selected_out_id": live.selected_out_id,
            "pending": pending,
            "can_undo": live.can_undo,
            "hint": hint,
            "field": _build_player_cards(live, state.on_field_ids()),
            "bench": _build_player_cards(live, state.bench_ids()),
        }

    def _live_response(live: LiveMatchService, **extra: Any) -> Response:
        payload = {"success": True, "live": _build_live_data(live)}
        payload.update(extra)
        return jsonify(payload)

    # ==================== Roster ==================== #

    @app.route("/api/players", methods=["GET"])
    def get_players():
        """List roster players, optionally filtered by ``q``."""
        players = app_state.roster.search(request.args.get("q", ""))
        return jsonify({"success": True, "players": [p.to_dict() for p in players]})

    # ==================== Sheet ==================== #

    @app.route("/api/sheet", methods=["GET"])
    def get_last_sheet():
        """Sheet of the last used match, used to prefill the match id."""
        sheet = app_state.sheet_service.load_last()
        if sheet is None:
            return jsonify({"success": True, "sheet": None})
        return jsonify({"success": True, **_build_sheet_data(sheet)})

    @app.route("/api/sheet/<int:match_id>", methods=["GET"])
    def get_sheet(match_id: int):
        sheet = app_state.sheet_service.load(match_id)
        return jsonify({"success": True, **_build_sheet_data(sheet)})

    @app.route("/api/sheet/<int:match_id>/<action>", methods=["POST"])
    def update_sheet(match_id: int, action: str):
        """Apply one sheet edit: select, xi, select-all, auto-xi, meta, finalize, reset."""
        data = _json_body()
        service = app_state.sheet_service
        try:
            if action == "reset":
                if not data.get("confirm"):
                    raise ConfirmationRequiredError("Confirm reset: sheet and live data will be deleted")
                app_state.drop_live(match_id)
                service.reset(match_id)
                return jsonify({"success": True, **_build_sheet_data(MatchSheet(match_id=match_id))})

            sheet = service.load(match_id)
            if action == "select":
                service.toggle_selected(sheet, int(data["player_id"]))
            elif action == "xi":
                service.toggle_xi(sheet, int(data["player_id"]))
            elif action == "select-all":
                service.select_all(sheet)
            elif action == "auto-xi":
                service.auto_xi(sheet)
            elif action == "meta":
                service.update_meta(
                    sheet,
                    opponent=data.get("opponent", sheet.opponent),
                    home_score=_int_or_none(data.get("home_score")),
                    away_score=_int_or_none(data.get("away_score")),
                )
            elif action == "finalize":
                service.finalize(sheet)
            else:
                return jsonify({"success": False, "error": f"Unknown sheet action: {action}"}), 404
            return jsonify({"success": True, **_build_sheet_data(sheet)})
        except (KeyError, ValueError, TypeError) as e:
            return jsonify({"success": False, "error": f"Invalid request: {e}"}), 400
        except U14LiveError as e:
            return _error_response(e)
        except OSError as e:
            return _storage_error(e)

    # ==================== Live ==================== #

    @app.route("/api/live/open", methods=["POST"])
    def open_live():
        """Open live tracking for ``match_id`` or the last used match."""
        data = _json_body()
        try:
            live = app_state.open_live(_int_or_none(data.get("match_id")))
            return _live_response(live)
        except (ValueError, TypeError) as e:
            return jsonify({"success": False, "error": f"Invalid request: {e}"}), 400
        except U14LiveError as e:
            return _error_response(e)
        except OSError as e:
            return _storage_error(e)

    @app.route("/api/live/state", methods=["GET"])
    def get_live_state():
        try:
            return _live_response(app_state.require_live())
        except U14LiveError as e:
            return _error_response(e)
        except OSError as e:
            return _storage_error(e)

    @app.route("/api/live/<action>", methods=["POST"])
    def live_action(action: str):
        """Apply one live action and return the refreshed live view."""
        data = _json_body()
        try:
            live = app_state.require_live()
            if action == "start":
                changed = live.start_clock()
            elif action == "pause":
                changed = live.pause_clock()
            elif action == "tick":
                changed = app_state.driver.fire(int(data.get("count", 1))) > 0
            elif action == "select-out":
                live.select_outgoing(int(data["player_id"]))
                changed = True
            elif action == "propose":
                if "out_id" in data:
                    proposal = live.propose_swap(int(data["out_id"]), int(data["in_id"]))
                else:
                    proposal = live.propose_incoming(int(data["in_id"]))
                changed = proposal is not None
            elif action == "confirm":
                changed = live.confirm_swap()
            elif action == "cancel":
                live.cancel_swap()
                changed = True
            elif action == "undo":
                changed = live.undo()
            elif action == "halftime":
                changed = live.halftime_transition(confirmed=bool(data.get("confirm")))
            elif action == "finish":
                live.finish(confirmed=bool(data.get("confirm")))
                changed = True
            else:
                return jsonify({"success": False, "error": f"Unknown live action: {action}"}), 404
            return _live_response(live, changed=changed)
        except (KeyError, ValueError, TypeError) as e:
            return jsonify({"success": False, "error": f"Invalid request: {e}"}), 400
        except U14LiveError as e:
            return _error_response(e)
        except OSError as e:
            return _storage_error(e)

    # ==================== Export ==================== #

    def _build_export():
        live = app_state.require_live()
        return app_state.export_service.build(live.state, live.sheet)

    @app.route("/api/export", methods=["GET"])
    def get_export():
        try:
            return jsonify({"success": True, "export": _build_export().to_dict()})
        except U14LiveError as e:
            return _error_response(e)
        except OSError as e:
            return _storage_error(e)

    @app.route("/api/export/download", methods=["GET"])
    def download_export():
        """Export as a downloadable ``match-<id>.json`` file."""
        try:
            export = _build_export()
        except U14LiveError as e:
            return _error_response(e)
        except OSError as e:
            return _storage_error(e)
        return Response(
            app_state.export_service.to_json_text(export),
            mimetype="application/json",
            headers={
                "Content-Disposition":
                    f"attachment; filename={app_state.export_service.filename(export.match_id)}"
            },
        )

    return app


def run_web_app(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    data_dir: str = DEFAULT_DATA_DIR,
    roster_path: str = DEFAULT_ROSTER_PATH,
) -> None:
    """
    Run the web application.

    Requests are served one at a time so match mutations never overlap.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        data_dir: Directory where match documents are stored
        roster_path: JSON roster file
    """
    app = create_app(data_dir, roster_path)
    logger.info("Serving U14 Live on %s:%s (data in %s)", host, port, os.path.abspath(data_dir))
    app.run(host=host, port=port, debug=False, threaded=False)
