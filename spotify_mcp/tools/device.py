"""
Device tools.

MCP tools for Spotify Connect playback devices.
"""

from spotify_mcp.spotify import SpotifyAPI


async def get_available_devices(api: SpotifyAPI) -> str:
    """List playback devices and mark the active one."""
    devices = await api.get_available_devices()

    if not devices:
        return "No devices found. Please open Spotify on a device to start playback."

    response = f"Available devices ({len(devices)}):\n\n"
    for index, device in enumerate(devices, start=1):
        active = " [ACTIVE]" if device.is_active else ""
        response += f"{index}. {device.name}{active}\n"
        response += f"   Type: {device.type}\n"
        response += f"   ID: {device.id}\n"
        if device.volume_percent is not None:
            response += f"   Volume: {device.volume_percent}%\n"
        response += f"   Status: {'Active' if device.is_active else 'Inactive'}\n\n"

    active_device = next((d for d in devices if d.is_active), None)
    if active_device:
        response += f"Currently active: {active_device.name}"
    else:
        response += "No active device. Select a device to start playback."
    return response
