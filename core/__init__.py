# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Logging and configuration shared by the service and its adapters
# CREATED: 19 OCT 2026
# ============================================================================
