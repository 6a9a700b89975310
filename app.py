#!/usr/bin/env python3
"""Hugging Face Spaces entry point for the Yomitan audio lookup UI."""

from yomitan_audio.app.app import main

if __name__ == "__main__":
    main()
