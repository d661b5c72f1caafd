#!/usr/bin/env python3
"""
Word Finder Gradio app
Main entry point for the deployed application
"""

from word_finder.app.app import main


if __name__ == "__main__":
    main()
