#!/usr/bin/env python3
"""podscribe Main Script.

A Gradio app that turns pasted text, web pages, YouTube videos or uploaded
files into a narrated podcast monologue.
"""

from podscribe.app import main

if __name__ == "__main__":
    main()
