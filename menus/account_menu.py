import questionary

from constants import PREMIUM_PRODUCT
from managers.spotify_manager import SpotifyIntegrationController
from utils.logger import log_info, log_success, log_warning
from utils.platform import PendingCalls

CONNECT = "Connect Spotify"
FINISHED_CONNECTING = "I've finished connecting in the browser"
VIEW_ACCOUNT = "View Spotify account"
SWITCH = "Switch Spotify account"
DISCONNECT = "Disconnect Spotify"
BACK = "Back"


def describe_account(controller: SpotifyIntegrationController) -> str:
    """One-line summary of the connected account for display."""
    user = controller.user_cache.get()
    if not controller.get_spotify_integration():
        return "Spotify: not connected"
    if user is None:
        return "Spotify: connected (profile not loaded)"
    tier = "Spotify Premium" if user.product == PREMIUM_PRODUCT else "Spotify Open"
    return f"Spotify: {user.email or user.display_name or user.id} ({tier})"


def run_pending(controller: SpotifyIntegrationController) -> None:
    """Run delayed notifications (view refreshes) that are due, on the menu thread."""
    if isinstance(controller.scheduler, PendingCalls):
        controller.scheduler.run_due()


def account_menu(controller: SpotifyIntegrationController):
    """
    Displays the Spotify account menu and runs the selected account action.
    """
    while True:
        run_pending(controller)
        connected = controller.get_spotify_integration() is not None
        choices = [VIEW_ACCOUNT, SWITCH, DISCONNECT, BACK] if connected else [CONNECT, FINISHED_CONNECTING, BACK]

        choice = questionary.select(
            f"🎧 Account Menu — {describe_account(controller)}",
            choices=choices,
        ).ask()

        if choice == CONNECT:
            if controller.connect():
                log_info(f"Finish signing in with Spotify in your browser, then choose '{FINISHED_CONNECTING}'.")

        elif choice == FINISHED_CONNECTING:
            if controller.sync_integrations():
                log_success(describe_account(controller))
            else:
                log_warning("No Spotify connection found yet. Complete the browser step and try again.")

        elif choice == VIEW_ACCOUNT:
            controller.user_cache.refresh(force=True)
            log_info(describe_account(controller))

        elif choice == SWITCH:
            controller.switch_account()

        elif choice == DISCONNECT:
            controller.disconnect()

        elif choice == BACK or choice is None:
            break

    run_pending(controller)
