#!/usr/bin/env python3
"""Gradio demo for TrustLens."""

from trustlens.config import settings
from trustlens.logger_config import configure_logging
from trustlens.ui import demo


if __name__ == "__main__":
    configure_logging(settings.log_level)
    demo.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=False,
    )
