"""
PR Autograder: a webhook that grades the README answers on a GitHub pull
request with Gemini and posts the result back as a pull request review.
"""

__version__ = "0.1.0"
