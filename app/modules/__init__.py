"""
Feature modules: auth, users, posts (with comments and reactions),
notifications, the home feed and media serving.
"""
