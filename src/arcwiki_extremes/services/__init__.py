# ABOUTME: Outbound services acting on finished results
# ABOUTME: Currently publishing the extremes artifact back to the wiki
