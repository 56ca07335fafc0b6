"""UI screen modules for WorkoutApp.

Screens are imported from their own modules so that the helper modules can
be used without creating a window.
"""
