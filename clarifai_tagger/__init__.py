"""
Clarifai Tagger

A small client that collects image references (local files or remote URLs),
submits them as one batch to the Clarifai recognition service, and collects
the returned concept tags per image.
"""

__version__ = "1.0.0"
__author__ = "Clarifai Tagger Team"
