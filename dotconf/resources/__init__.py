# dotconf/resources/__init__.py
"""
Bundled resource files, extracted with ``FileLocator.save_resource``.
"""
