import questionary


def confirm_yes(message: str) -> bool:
    """Ask a yes/no question. Dismissing the prompt (Ctrl+C) counts as no."""
    answer = questionary.confirm(message, default=False).ask()
    return answer is True
