from __future__ import annotations

MSG_WELCOME = """
Welcome to the NetHunter installer!

This installer will:

1. Unlock your device's bootloader (if needed)
2. Download NetHunter, a recovery image and any device firmware
3. Flash the recovery image and wipe the previous system
4. Install NetHunter and its filesystem

WARNING: This will wipe all the data on your device. Back up anything you
want to keep before continuing.

Make sure your device is connected over USB with USB debugging enabled."""

MSG_INCOMPLETE_TOOLS = (
    "adb and fastboot must be installed, or shipped next to the installer. "
    "Try downloading the installer again."
)

MSG_ADB_ISSUE = """
Your device is not connected or USB debugging has not been authorized.

Make sure you:
1. Enabled USB debugging in Settings > Developer options
2. Accepted the "Allow USB debugging?" prompt on your device
3. Used a data-capable USB cable"""

MSG_FIX_PERMS = """
Your computer does not have permission to access the device over USB.

On Linux, install the udev rules for Android devices (e.g. the
android-sdk-platform-tools-common package) and reconnect the cable."""

MSG_FASTBOOT_NO_DEVICE = (
    "Your device is not visible in bootloader mode. Reconnect it and make sure "
    "it shows the bootloader screen."
)

MSG_UNLOCK_SUCCESS = """
Your bootloader has been unlocked!

Your device will now wipe itself and reboot. Once it finishes booting, enable
USB debugging again and re-run this installer to continue."""

MSG_SUCCESS = "Installation complete! Rebooting your device..."

MSG_REENABLE = """
Your device is rebooting into the new system. Once it has booted, enable
Developer options and USB debugging again so the installer can finish setting
up the NetHunter filesystem."""

MSG_MANUAL_REBOOT = "Please reboot your device manually by going to Reboot > System > Do Not Install"
