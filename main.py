import logging
from dataclasses import dataclass
from getpass import getpass
from typing import Optional

from sentinel.advisor import AdviceRequest, get_security_advice
from sentinel.analysis_record import AnalysisRecord
from sentinel.analyzer import analyze_password
from sentinel.config import Settings, load_settings
from sentinel.history import HistoryStore


@dataclass
class AppContext:
    """
    State owned by the front-end: settings, history and the last result.
    The core modules never read or write any of it.
    """
    settings: Settings
    history: HistoryStore
    last_record: Optional[AnalysisRecord] = None
    last_advice: str = ""


def show_menu():
    print("\n=== SENTINEL ===")
    print("1. Analyze a password")
    print("2. Show audit log")
    print("3. Clear audit log")
    print("4. Exit")


def confirm(prompt: str) -> bool:
    ans = input(f"{prompt} [y/n]: ").strip().lower()
    return ans in ("y", "yes")


def print_record(record: AnalysisRecord):
    print(f"\nStrength  : {record.level.label} (score {record.score}/4)")
    print(f"Crack time: {record.crack_time}")
    print(f"Entropy   : {record.entropy:.1f} bits")
    if record.is_compromised:
        print(f"⚠️ Found in data breaches {record.occurrence_count:,} times! Change it everywhere.")
    else:
        print("✅ Not found in known breaches.")
    if record.warning:
        print(f"⚠️ {record.warning}")
    for s in record.suggestions:
        print(f"- {s}")
    if not record.suggestions and not record.warning:
        print("No basic improvements needed.")


def run_analysis(ctx: AppContext, password: str) -> AnalysisRecord:
    s = ctx.settings
    record = analyze_password(password, timeout=s.request_timeout, range_url=s.range_url)
    ctx.last_record = record
    ctx.history.add_record(record)
    print_record(record)

    # advice comes last so the local results are already on screen
    print("\n--- Security analyst ---")
    ctx.last_advice = get_security_advice(
        AdviceRequest.from_record(record),
        api_key=s.api_key,
        model=s.advice_model,
        timeout=s.advice_timeout,
    )
    print(ctx.last_advice)
    return record


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    ctx = AppContext(
        settings=settings,
        history=HistoryStore(settings.history_path, capacity=settings.history_capacity),
    )

    try:
        while True:
            show_menu()
            choice = input("Choose an option: ").strip()

            if choice == "1":
                pw = getpass("Password: ")
                if not pw:
                    print("(nothing to analyze)")
                    continue
                run_analysis(ctx, pw)

            elif choice == "2":
                records = ctx.history.get_all()
                if not records:
                    print("(no previous logs)")
                for r in records:
                    print(r)

            elif choice == "3":
                if not confirm("Clear the whole audit log?"):
                    print("Cancelled.")
                    continue
                ctx.history.clear()
                print("[✓] Audit log cleared.")

            elif choice == "4":
                print("Bye 👋")
                break

            else:
                print("Invalid option.")
    finally:
        ctx.history.close()


if __name__ == "__main__":
    main()
