"""Exercise detail screen: body parts, favorite toggle and personal records."""

from __future__ import annotations

from kivy.metrics import dp
from kivy.properties import ObjectProperty, StringProperty
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDIconButton, MDRaisedButton
from kivymd.uix.label import MDLabel
from kivymd.uix.screen import MDScreen

from backend.history import format_best, format_previous

from .exercise_library_helpers import body_part_summary


class ExerciseDetailScreen(MDScreen):
    """Shows one catalog exercise together with the user's records."""

    exercise_id = StringProperty("")
    previous_screen = StringProperty("exercise_library")
    exercise = ObjectProperty(None, allownone=True)

    def __init__(self, stores, **kwargs):
        super().__init__(**kwargs)
        self.stores = stores
        self._build()
        stores.favorites.bind(favorites=self.refresh)
        stores.history.bind(history=self.refresh)

    def _build(self):
        root = MDBoxLayout(orientation="vertical", padding=dp(16), spacing=dp(8))
        header = MDBoxLayout(size_hint_y=None, height=dp(48))
        header.add_widget(MDIconButton(icon="arrow-left", on_release=lambda *_: self.go_back()))
        self.title_label = MDLabel(font_style="H6", shorten=True)
        header.add_widget(self.title_label)
        self.favorite_button = MDIconButton(on_release=lambda *_: self.toggle_favorite())
        header.add_widget(self.favorite_button)
        root.add_widget(header)
        self.parts_label = MDLabel(theme_text_color="Secondary")
        self.previous_label = MDLabel()
        self.best_label = MDLabel()
        for label in (self.parts_label, self.previous_label, self.best_label):
            root.add_widget(label)
        root.add_widget(
            MDRaisedButton(text="Voltar", on_release=lambda *_: self.go_back())
        )
        self.add_widget(root)

    def on_exercise_id(self, *args):
        self.exercise = self.stores.catalog.get(self.exercise_id)
        self.refresh()

    def refresh(self, *args):
        exercise = self.exercise
        if exercise is None:
            self.title_label.text = ""
            self.parts_label.text = ""
            self.previous_label.text = ""
            self.best_label.text = ""
            return
        record = self.stores.history.get_history(exercise.id)
        self.title_label.text = exercise.name
        self.parts_label.text = body_part_summary(exercise.body_parts, limit=len(exercise.body_parts))
        self.previous_label.text = f"Anterior: {format_previous(record)}"
        self.best_label.text = f"Recorde: {format_best(record)}"
        self.favorite_button.icon = (
            "heart" if self.stores.favorites.is_favorite(exercise.id) else "heart-outline"
        )

    def toggle_favorite(self):
        if self.exercise is not None:
            self.stores.favorites.toggle_favorite(self.exercise.id)

    def go_back(self):
        if self.manager:
            self.manager.current = self.previous_screen
