#!/usr/bin/env python3
"""
Management utility for the turnstile system.

Usage:
    turnstile-manage demo         - Issue sample cards and replay a turnstile session
    turnstile-manage show-config  - Show effective settings
"""

import sys

from turnstile.config import configure_logging, settings
from turnstile.models import CardCategory, PeriodKind
from turnstile.registry import CardRegistry
from turnstile.services import ConsoleTurnstileView, TurnstileController, TurnstileStatistics


def build_controller() -> TurnstileController:
    """Create a controller wired to a console view."""
    return TurnstileController(
        registry=CardRegistry(),
        statistics=TurnstileStatistics(),
        view=ConsoleTurnstileView()
    )


def run_demo():
    """Issue sample cards, present them at the turnstile and print statistics."""
    controller = build_controller()

    controller.issue_period_card("STU001", CardCategory.STUDENT, PeriodKind.MONTH)
    controller.issue_period_card("PUP001", CardCategory.PUPIL, PeriodKind.TEN_DAYS)
    controller.issue_period_card("REG010", CardCategory.REGULAR, PeriodKind.TEN_DAYS)
    controller.issue_trip_card("REG001", CardCategory.REGULAR, 5)
    controller.issue_trip_card("STU002", CardCategory.STUDENT, 10)
    controller.issue_accumulative_card("ACC001", 100.0)

    print("\n" + "=" * 50)
    print("TURNSTILE SIMULATION")
    print("=" * 50)

    presentations = ["STU001", "PUP001"] + ["REG001"] * 6 + ["ACC001", "ACC001", "UNKNOWN"]
    for card_id in presentations:
        controller.process_card(card_id)

    controller.show_statistics()


def show_config():
    """Display effective settings."""
    print("\n" + "=" * 50)
    print("TURNSTILE SETTINGS")
    print("=" * 50)
    for key, value in settings.as_dict().items():
        print(f"{key:<32} {value}")
    print("=" * 50)


def main():
    """Main entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        return

    configure_logging("WARNING")
    command = sys.argv[1].lower()

    commands = {
        'demo': run_demo,
        'show-config': show_config
    }

    if command in commands:
        commands[command]()
    else:
        print(f"Unknown command: {command}")
        print(__doc__)


if __name__ == "__main__":
    main()
