"""
CalcStack Calculator
Main application entry point: the GUI and the web API drive one shared session
"""
import socket
import threading
import tkinter as tk
import config
from api import ApiServer, create_app
from database import Database
from gui import CalcStackGUI
from history_manager import HistoryManager
from session import CalculatorSession

def get_local_ip():
    """Address other devices on the network can reach this machine on"""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            # doesn't even have to be reachable
            s.connect(('10.255.255.255', 1))
            return s.getsockname()[0]
    except OSError:
        return '127.0.0.1'

def build_session():
    """Session whose finished calculations go to the history database"""
    return CalculatorSession(history_manager=HistoryManager(Database()))

def start_api_server(session, lock):
    """Serve the session's API in-process; None when the port is unavailable"""
    try:
        server = ApiServer(create_app(session=session, lock=lock))
    except OSError as e:
        print(f"Failed to start API server: {e}")
        return None
    server.start()
    print("="*60)
    print(f"{config.APP_NAME} API is serving the calculator on screen")
    print(f"Access on this PC:    http://localhost:{server.port}/api/state")
    print(f"Access on your Phone: http://{get_local_ip()}:{server.port}/api/state")
    print("="*60)
    return server

def main():
    session = build_session()
    lock = threading.Lock()
    server = start_api_server(session, lock)

    root = tk.Tk()
    CalcStackGUI(root, session=session, lock=lock)
    try:
        root.mainloop()
    finally:
        if server is not None:
            server.stop()
            print("API server stopped")

if __name__ == "__main__":
    main()
