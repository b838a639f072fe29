"""Network locations shared by the server, the client and notifications."""

IP = "127.0.0.1"
PORT = "8080"
BASE_URL = f"http://{IP}:{PORT}/api"
NTFY_URL = "https://ntfy.example.com"