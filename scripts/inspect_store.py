"""Print every key in the store with a short summary of what it holds."""
import json
from core.config import DATABASE_URL
from core.errors import ParseError
from services.store_service import CURRENT_USER, INCIDENTS, PATIENTS, USERS, get_store, physical_key


def main():
    store = get_store()
    print("DB:", DATABASE_URL)
    print("keys:", store.keys())
    for name in (USERS, PATIENTS, INCIDENTS):
        key = physical_key(name)
        if not store.has(name):
            print(f"{key}: <absent>")
            continue
        try:
            records = store.load_collection(name)
            print(f"{key}: {len(records)} record(s)")
            for r in records[:10]:
                print("   ", r.get("id"), r.get("name") or r.get("title") or r.get("email"))
        except ParseError as e:
            print(f"{key}: CORRUPT ({e.reason})")

    # One saved session per browser token
    prefix = physical_key(CURRENT_USER) + ":"
    sessions = [k for k in store.keys() if k.startswith(prefix)]
    print(f"sessions: {len(sessions)}")
    for key in sessions:
        token = key[len(prefix):]
        try:
            print(f"   {token}: {json.dumps(store.load_record(CURRENT_USER, scope=token))}")
        except ParseError as e:
            print(f"   {token}: CORRUPT ({e.reason})")


if __name__ == "__main__":
    main()
