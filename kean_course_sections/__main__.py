"""
Allows running the tool via:

    python -m kean_course_sections
"""
import sys

from kean_course_sections.cli import main

if __name__ == "__main__":
    sys.exit(main())
