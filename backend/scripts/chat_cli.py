"""
Terminal chat client for /api/chat. The backend must be running.
  CHAT_URL=http://localhost:8000/api/chat python scripts/chat_cli.py
Commands: /reset starts a new conversation, /quit exits.
"""
import os
import sys

import httpx

# Default: backend running locally
CHAT_URL = os.environ.get("CHAT_URL", "http://localhost:8000/api/chat")


def chat(client: httpx.Client, message: str, session_id: str | None) -> tuple[str, str | None]:
    """Send message to backend, return (response text, session_id)."""
    payload = {"message": message}
    if session_id:
        payload["sessionId"] = session_id
    try:
        r = client.post(CHAT_URL, json=payload, timeout=60.0)
        r.raise_for_status()
        data = r.json()
        return data.get("response", ""), data.get("sessionId") or session_id
    except httpx.HTTPStatusError as e:
        return f"API error {e.response.status_code}: {e.response.text[:500]}", session_id
    except httpx.HTTPError as e:
        return f"Error: {e}", session_id


def reset(client: httpx.Client, session_id: str | None) -> None:
    if not session_id:
        return
    try:
        client.post(f"{CHAT_URL}/reset", json={"sessionId": session_id}, timeout=10.0)
    except httpx.HTTPError as e:
        print(f"(reset failed: {e})")


def main() -> int:
    print(f"Chat → {CHAT_URL}  (/reset, /quit)")
    session_id = None
    with httpx.Client() as client:
        while True:
            try:
                message = input("you> ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not message:
                continue
            if message == "/quit":
                break
            if message == "/reset":
                reset(client, session_id)
                session_id = None
                print("(conversation reset)")
                continue
            response, session_id = chat(client, message, session_id)
            print(f"bot> {response}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
