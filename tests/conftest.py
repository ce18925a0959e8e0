import os

# Telemetry is configured at import time; keep it off the console so tests
# capturing stdout only see editor output.
os.environ["ED_ENGINE_LOG_CONSOLE"] = "0"
