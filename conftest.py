"""Global pytest configuration."""

import os

# Never reach the real model service from tests
os.environ["GEMINI_API_KEY"] = ""
