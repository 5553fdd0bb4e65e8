"""Presenter tooling: the rotating QR code shown at the front of the room."""
from rollcall.presenter.client import RotationClient
from rollcall.presenter.render import checkin_url, generate_qr_svg, render_token

__all__ = ["RotationClient", "checkin_url", "generate_qr_svg", "render_token"]
