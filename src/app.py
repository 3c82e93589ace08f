"""
Flask web application for the pickleball tournament engine.

Exposes the round robin, draft and bracket flows as a JSON API. All state
lives in the session store under TOURNAMENT_DATA_DIR and every request holds
the data lock while it reads or writes it.
"""
import os
import logging
import yaml
from functools import wraps
from filelock import FileLock
from flask import Flask, jsonify, request, url_for
from core.bracket import BRACKET_TEAMS, DEFAULT_TEAM_NAMES
from core.errors import IncompletePrerequisite, InvalidPlayerCount, InvalidScore, MissingSessionState
from core.session import TournamentSession
from core.storage import YamlStore

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('TOURNAMENT_DATA_DIR', os.path.join(BASE_DIR, 'data'))
LOCK_TIMEOUT_SECONDS = 10

os.makedirs(DATA_DIR, exist_ok=True)


def _session_dir() -> str:
    return os.path.join(DATA_DIR, 'session')


def _settings_file() -> str:
    return os.path.join(DATA_DIR, 'settings.yaml')


def get_default_settings():
    """Return default settings."""
    return {
        'tournament_name': 'Mini Moneyball',
        'team_names': list(DEFAULT_TEAM_NAMES),
    }


def load_settings():
    """Load settings from YAML file, merging with defaults."""
    defaults = get_default_settings()
    path = _settings_file()
    if not os.path.exists(path):
        return defaults
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        app.logger.warning(f'Failed to parse {path}: {e}')
        return defaults
    if not isinstance(data, dict):
        return defaults
    for key, value in defaults.items():
        if key not in data:
            data[key] = value
    if not _valid_team_names(data['team_names']):
        app.logger.warning(f'Ignoring team_names in {path}: expected {BRACKET_TEAMS} names')
        data['team_names'] = defaults['team_names']
    return data


def _valid_team_names(names) -> bool:
    return (isinstance(names, list) and len(names) == BRACKET_TEAMS
            and all(isinstance(n, str) and n.strip() for n in names))


def get_session() -> TournamentSession:
    return TournamentSession(YamlStore(_session_dir()))


def with_data_lock(f):
    """Serialize access to the session store (one writer at a time)."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        os.makedirs(DATA_DIR, exist_ok=True)
        with FileLock(os.path.join(DATA_DIR, '.lock'), timeout=LOCK_TIMEOUT_SECONDS):
            return f(*args, **kwargs)
    return decorated_function


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _int_field(data, name):
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{name}' must be an integer")
    return value


def _blocked(message):
    return jsonify({'success': False, 'error': message}), 409


# Error handlers

@app.errorhandler(InvalidScore)
@app.errorhandler(InvalidPlayerCount)
@app.errorhandler(ValueError)
def handle_bad_input(e):
    return jsonify({'success': False, 'error': str(e)}), 400


@app.errorhandler(IncompletePrerequisite)
def handle_incomplete(e):
    return _blocked(str(e))


@app.errorhandler(MissingSessionState)
def handle_missing_state(e):
    app.logger.info(f'Missing session state "{e.key}", redirecting to start')
    return jsonify({'success': False, 'error': str(e), 'redirect': url_for('index')}), 409


# Payload helpers

def _rounds_payload(session):
    nav = session.navigator()
    return {
        'players': session.player_names(),
        'rounds': [r.to_dict() for r in nav.rounds],
        'currentRound': nav.current,
        'furthestRound': nav.furthest,
        'canAdvance': nav.can_advance(),
        'canGoBack': nav.can_go_back(),
        'canSubmit': nav.can_submit(),
    }


def _draft_payload(session, draft):
    return {
        'players': session.player_names(),
        **draft.to_dict(),
        'complete': draft.is_complete(),
    }


def _semifinals_payload(session):
    semifinals = session.load_semifinals()
    return {
        'players': session.player_names(),
        'matches': [m.to_dict() for m in semifinals],
        'phase': session.phase(),
    }


def _final_payload(session):
    final = session.load_final()
    return {
        'players': session.player_names(),
        **final.to_dict(),
        'openGames': [final.can_record(i) for i in range(len(final.games))],
    }


# Routes

@app.route('/')
@with_data_lock
def index():
    """Summary of the active tournament."""
    settings = load_settings()
    session = get_session()
    return jsonify({
        'tournament_name': settings['tournament_name'],
        'phase': session.phase(),
    })


@app.route('/api/players', methods=['POST'])
@with_data_lock
def api_start_tournament():
    """Start a new tournament from eight player names."""
    names = _json_body().get('players')
    if not isinstance(names, list):
        return jsonify({'success': False, 'error': "'players' must be a list of names"}), 400
    players = get_session().start(names)
    app.logger.info('New tournament started')
    return jsonify({'success': True, 'players': [p.to_dict() for p in players]})


@app.route('/api/rounds')
@with_data_lock
def api_rounds():
    return jsonify(_rounds_payload(get_session()))


@app.route('/api/rounds/<int:round_index>/matches/<int:match_index>/score', methods=['POST'])
@with_data_lock
def api_round_score(round_index, match_index):
    """Record the score of one round robin match."""
    data = _json_body()
    session = get_session()
    if not session.record_round_score(round_index, match_index, data.get('score1'), data.get('score2')):
        return _blocked('This round is not open for scoring yet')
    return jsonify({'success': True, **_rounds_payload(session)})


@app.route('/api/rounds/next', methods=['POST'])
@with_data_lock
def api_next_round():
    session = get_session()
    if not session.advance_round():
        return _blocked('Finish every match of the current round first')
    return jsonify({'success': True, **_rounds_payload(session)})


@app.route('/api/rounds/previous', methods=['POST'])
@with_data_lock
def api_previous_round():
    session = get_session()
    if not session.previous_round():
        return _blocked('Already at the first round')
    return jsonify({'success': True, **_rounds_payload(session)})


@app.route('/api/leaderboard')
@with_data_lock
def api_leaderboard():
    stats = get_session().leaderboard()
    return jsonify({'leaderboard': [s.to_dict() for s in stats]})


@app.route('/api/draft')
@with_data_lock
def api_draft():
    session = get_session()
    draft = session.load_draft(load_settings()['team_names'])
    return jsonify(_draft_payload(session, draft))


@app.route('/api/draft/assign', methods=['POST'])
@with_data_lock
def api_draft_assign():
    """Move a player into an empty team slot."""
    data = _json_body()
    session = get_session()
    draft = session.load_draft(load_settings()['team_names'])
    player_id = data.get('player')
    if not draft.assign(player_id, _int_field(data, 'team'), _int_field(data, 'slot')):
        return _blocked('That slot is already taken')
    session.save_draft(draft)
    return jsonify({'success': True, **_draft_payload(session, draft)})


@app.route('/api/draft/vacate', methods=['POST'])
@with_data_lock
def api_draft_vacate():
    """Send the player in a team slot back to the available pool."""
    data = _json_body()
    session = get_session()
    draft = session.load_draft(load_settings()['team_names'])
    draft.vacate(_int_field(data, 'team'), _int_field(data, 'slot'))
    session.save_draft(draft)
    return jsonify({'success': True, **_draft_payload(session, draft)})


@app.route('/api/draft/finalize', methods=['POST'])
@with_data_lock
def api_draft_finalize():
    session = get_session()
    draft = session.load_draft(load_settings()['team_names'])
    if not session.finalize_draft(draft):
        return _blocked('Every team needs two players')
    return jsonify({'success': True, **_semifinals_payload(session)})


@app.route('/api/semifinals')
@with_data_lock
def api_semifinals():
    return jsonify(_semifinals_payload(get_session()))


@app.route('/api/semifinals/<int:match_index>/score', methods=['POST'])
@with_data_lock
def api_semifinal_score(match_index):
    data = _json_body()
    session = get_session()
    if not session.record_semifinal_score(match_index, data.get('score1'), data.get('score2')):
        return _blocked('Semifinals are closed once the final is set')
    return jsonify({'success': True, **_semifinals_payload(session)})


@app.route('/api/semifinals/proceed', methods=['POST'])
@with_data_lock
def api_proceed_to_finals():
    session = get_session()
    if not session.proceed_to_finals():
        return _blocked('Both semifinals need a result first')
    return jsonify({'success': True, **_final_payload(session)})


@app.route('/api/finals')
@with_data_lock
def api_finals():
    return jsonify(_final_payload(get_session()))


@app.route('/api/finals/games/<int:game_index>/score', methods=['POST'])
@with_data_lock
def api_final_game_score(game_index):
    """Record one game of the best-of-three final."""
    data = _json_body()
    session = get_session()
    if not session.record_final_game(game_index, data.get('score1'), data.get('score2')):
        return _blocked('This game is not open for scoring')
    return jsonify({'success': True, **_final_payload(session)})


@app.route('/api/reset', methods=['POST'])
@with_data_lock
def api_reset_all():
    """Start over: clear all tournament data."""
    get_session().reset()
    app.logger.info('Tournament data cleared')
    return jsonify({'success': True})


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, port=5000)
