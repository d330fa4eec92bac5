"""
Flask REST API for CalcStack
Exposes a calculator session and the calculation log as JSON endpoints
"""
import threading
from datetime import datetime

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.serving import make_server

import config
from database import Database
from history_manager import HistoryManager
from operands import parse_operand
from session import CalculatorSession


class BadRequest(ValueError):
    """Malformed request payload"""


def _payload():
    return request.get_json(silent=True) or {}


def _required(data, key):
    value = data.get(key)
    if value is None or value == "":
        raise BadRequest(f"'{key}' is required")
    return value


def _error(e, status):
    return jsonify({'success': False, 'error': str(e)}), status


def create_app(db_path=config.DB_PATH, session=None, lock=None):
    """Build the API for a session; pass the GUI's session and lock to share them"""
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    # Initialize components
    if session is not None and session.history_manager is not None:
        history_manager = session.history_manager
    else:
        history_manager = HistoryManager(Database(db_path))
    if session is None:
        session = CalculatorSession(history_manager=history_manager)
    # one shared session; everything touching it holds this lock
    if lock is None:
        lock = threading.Lock()

    app.config['CALC_SESSION'] = session
    app.config['HISTORY_MANAGER'] = history_manager
    app.config['SESSION_LOCK'] = lock

    def state_response():
        data = session.snapshot()
        data['timestamp'] = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return jsonify({'success': True, 'data': data})

    def session_action(action):
        try:
            with lock:
                action(_payload())
                return state_response()
        except BadRequest as e:
            return _error(e, 400)
        except Exception as e:
            return _error(e, 500)

    @app.route('/api')
    def api_info():
        """API information page"""
        return f"""
        <html>
        <head><title>{config.APP_NAME} API</title></head>
        <body style="font-family: Arial; padding: 40px;">
            <h1>{config.APP_NAME} API Server</h1>
            <h2>Available Endpoints:</h2>
            <ul>
                <li>GET /api/state - Display, history, memory and variables</li>
                <li>POST /api/digit, /api/decimal, /api/negate, /api/sign - Edit the entry</li>
                <li>POST /api/operate - Press an operator button</li>
                <li>POST /api/apply - Apply a button to an explicit operand</li>
                <li>POST /api/undo, /api/clear, /api/memory</li>
                <li>GET/POST /api/variables - Variable table</li>
                <li>GET/DELETE /api/calculations - Calculation history</li>
            </ul>
        </body>
        </html>
        """

    @app.route('/api/state')
    def get_state():
        """Get the current session state"""
        try:
            with lock:
                return state_response()
        except Exception as e:
            return _error(e, 500)

    @app.route('/api/digit', methods=['POST'])
    def enter_digit():
        def action(data):
            digit = str(_required(data, 'digit'))
            if len(digit) != 1 or not digit.isdigit():
                raise BadRequest(f"Invalid digit: {digit}")
            session.enter_digit(digit)
        return session_action(action)

    @app.route('/api/decimal', methods=['POST'])
    def decimal():
        return session_action(lambda data: session.decimal())

    @app.route('/api/negate', methods=['POST'])
    def negate():
        return session_action(lambda data: session.negate())

    @app.route('/api/sign', methods=['POST'])
    def toggle_sign():
        return session_action(lambda data: session.toggle_sign())

    @app.route('/api/clear', methods=['POST'])
    def clear():
        return session_action(lambda data: session.clear())

    @app.route('/api/undo', methods=['POST'])
    def undo():
        return session_action(lambda data: session.undo())

    @app.route('/api/operate', methods=['POST'])
    def operate():
        return session_action(lambda data: session.operate(str(_required(data, 'button'))))

    @app.route('/api/memory', methods=['POST'])
    def memory():
        def action(data):
            function = _required(data, 'function')
            if function not in ("MC", "MR", "MS", "M+", "M-"):
                raise BadRequest(f"Unknown memory function: {function}")
            session.memory_operate(function)
        return session_action(action)

    @app.route('/api/apply', methods=['POST'])
    def apply():
        """Apply a button to an explicit operand, bypassing the entry buffer"""
        try:
            data = _payload()
            button = str(_required(data, 'button'))
            raw = _required(data, 'operand')
            if isinstance(raw, bool):
                raise BadRequest("'operand' must be a number or a variable name")
            operand = parse_operand(raw)
            with lock:
                result = session.brain.apply(button, operand)
                return jsonify({
                    'success': True,
                    'data': {
                        'result': result,
                        'history': session.brain.render(),
                        'commands': session.brain.commands(),
                    }
                })
        except BadRequest as e:
            return _error(e, 400)
        except Exception as e:
            return _error(e, 500)

    @app.route('/api/variables', methods=['GET', 'POST'])
    def variables():
        """Read the variable table, or set one variable"""
        try:
            if request.method == 'GET':
                with lock:
                    return jsonify({'success': True, 'data': session.brain.get_variables()})

            data = _payload()
            name = str(_required(data, 'name'))
            with lock:
                if data.get('value') is None:
                    value = session.set_variable(name)
                else:
                    try:
                        value = float(data['value'])
                    except (TypeError, ValueError):
                        raise BadRequest(f"Invalid value: {data['value']}")
                    session.brain.set_variable(name, value)
                return jsonify({'success': True, 'data': {'name': name, 'value': value}})
        except BadRequest as e:
            return _error(e, 400)
        except Exception as e:
            return _error(e, 500)

    @app.route('/api/variables/<name>/recall', methods=['POST'])
    def recall_variable(name):
        return session_action(lambda data: session.recall_variable(name))

    @app.route('/api/calculations', methods=['GET', 'DELETE'])
    def calculations():
        """Get or clear calculation history"""
        try:
            if request.method == 'DELETE':
                history_manager.clear_calculation_history()
                return jsonify({'success': True})

            try:
                limit = int(request.args.get('limit', config.MAX_HISTORY_ITEMS))
            except ValueError:
                raise BadRequest(f"Invalid limit: {request.args.get('limit')}")

            formatted = []
            for c in history_manager.get_calculation_history(limit):
                formatted.append({
                    'expression': c[0],
                    'result': c[1],
                    'timestamp': c[2]
                })

            return jsonify({
                'success': True,
                'data': formatted,
                'count': len(formatted)
            })
        except BadRequest as e:
            return _error(e, 400)
        except Exception as e:
            return _error(e, 500)

    return app


class ApiServer(threading.Thread):
    """Serves an API app from a background thread of the GUI process"""

    def __init__(self, app, host=config.WEB_HOST, port=config.WEB_PORT):
        super().__init__(name="calcstack-api", daemon=True)
        self.server = make_server(host, port, app, threaded=True)

    @property
    def port(self):
        return self.server.server_port

    def run(self):
        self.server.serve_forever()

    def stop(self):
        self.server.shutdown()
        self.server.server_close()


if __name__ == '__main__':
    print("\n" + "="*60)
    print(f"{config.APP_NAME} API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}/api")
    print("="*60 + "\n")

    create_app().run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
