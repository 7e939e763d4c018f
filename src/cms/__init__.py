"""RMS content API.

Serves content articles and slideshow slides for the RMS web front end. Slides
own an image asset on disk; :mod:`src.cms.slides.slides_service` keeps the
slide rows and their files consistent.
"""
