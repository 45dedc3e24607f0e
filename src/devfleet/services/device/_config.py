"""
Configuration constants for device service.
"""

# Supervisor /apps endpoints exist from 1.8.0; prerelease 1.8.0-p1 builds shipped them too
MIN_SUPERVISOR_APPS_API = "1.8.0-alpha.0"

# Multicontainer service actions
MIN_SUPERVISOR_MC_API = "7.0.0"

# Supervisor refuses the action while update locks are held
LOCKED_STATUS_CODE = 423

NOT_FOUND_STATUS_CODE = 404

BAD_REQUEST_STATUS_CODE = 400

# Returned by the device key endpoint when the device is gone
NO_DEVICE_FOR_KEY_MESSAGE = "No device found to associate with the api key"

# Default ordering of device listings
DEVICE_ORDERBY = "device_name asc"

# Release status a device can be pinned to
SUCCESSFUL_RELEASE_STATUS = "success"
