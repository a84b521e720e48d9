#!/usr/bin/env python3
"""
PR Reviewer Assigner
Requests reviewers for a pull request event and announces them in chat.
"""

from pr_assigner.main import main


if __name__ == "__main__":
    main()
