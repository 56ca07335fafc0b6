import logging
import os
import sys

from kivy.core.window import Window
from kivy.uix.screenmanager import NoTransition, ScreenManager
from kivymd.app import MDApp

from core import AppStores, configure_logging, init_stores
from ui.screens.exercise_detail import ExerciseDetailScreen
from ui.screens.exercise_library import ExerciseLibraryScreen


if os.name == "nt" or sys.platform.startswith("win"):
    Window.size = (280, 280 * (20 / 9))


class WorkoutApp(MDApp):
    stores: AppStores | None = None

    def build(self):
        configure_logging()
        self.stores = init_stores()
        manager = ScreenManager(transition=NoTransition())
        manager.add_widget(
            ExerciseLibraryScreen(self.stores, name="exercise_library")
        )
        manager.add_widget(ExerciseDetailScreen(self.stores, name="exercise_detail"))
        return manager

    def complete_set(self, exercise_id: str, weight: str, reps: str) -> bool:
        """Record a completed workout set and report whether it was a PR."""
        if not self.stores:
            return False
        is_pr = self.stores.complete_set(exercise_id, weight, reps)
        if is_pr:
            logging.info("New personal record for exercise %s", exercise_id)
        return is_pr

    def on_pause(self):
        # Android may kill a paused app without calling on_stop
        if self.stores:
            self.stores.flush()
        return True

    def on_stop(self):
        if self.stores:
            self.stores.flush()


if __name__ == "__main__":
    WorkoutApp().run()
