"""Exercise library screen module for WorkoutApp."""

from __future__ import annotations

from kivy.clock import Clock
from kivy.metrics import dp
from kivy.properties import (
    BooleanProperty,
    ObjectProperty,
    StringProperty,
)
from kivy.uix.behaviors import ButtonBehavior
from kivy.uix.recyclegridlayout import RecycleGridLayout
from kivy.uix.recycleview import RecycleView
from kivy.uix.scrollview import ScrollView
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDFlatButton, MDIconButton, MDRaisedButton
from kivymd.uix.label import MDLabel
from kivymd.uix.screen import MDScreen
from kivymd.uix.selectioncontrol import MDCheckbox
from kivymd.uix.textfield import MDTextField

from backend import settings
from backend.categories import CATEGORIES

from .exercise_library_helpers import populate_exercises


class ExerciseRow(ButtonBehavior, MDBoxLayout):
    """Row of the library list, driven by RecycleView data."""

    exercise_id = StringProperty("")
    text = StringProperty("")
    secondary_text = StringProperty("")
    image_ref = StringProperty("")
    is_favorite = BooleanProperty(False)
    is_selected = BooleanProperty(False)
    show_checkbox = BooleanProperty(False)
    tap_callback = ObjectProperty(None, allownone=True)
    favorite_callback = ObjectProperty(None, allownone=True)

    def __init__(self, **kwargs):
        super().__init__(
            orientation="horizontal",
            size_hint_y=None,
            height=dp(72),
            padding=(dp(8), 0),
            **kwargs,
        )
        self.favorite_button = MDIconButton(on_release=self._toggle_favorite)
        labels = MDBoxLayout(orientation="vertical")
        self.name_label = MDLabel(bold=True, shorten=True)
        self.parts_label = MDLabel(theme_text_color="Secondary", font_style="Caption")
        labels.add_widget(self.name_label)
        labels.add_widget(self.parts_label)
        self.checkbox = MDCheckbox(size_hint=(None, None), size=(dp(40), dp(40)))
        self.checkbox.disabled = True
        self.add_widget(self.favorite_button)
        self.add_widget(labels)
        self.add_widget(self.checkbox)
        self.bind(
            text=self._refresh,
            secondary_text=self._refresh,
            is_favorite=self._refresh,
            is_selected=self._refresh,
            show_checkbox=self._refresh,
        )
        self._refresh()

    def _refresh(self, *args):
        self.name_label.text = self.text
        self.parts_label.text = self.secondary_text
        self.favorite_button.icon = "heart" if self.is_favorite else "heart-outline"
        self.checkbox.active = self.is_selected
        self.checkbox.opacity = 1 if self.show_checkbox else 0

    def _toggle_favorite(self, *args):
        if self.favorite_callback:
            self.favorite_callback()

    def on_release(self):
        if self.tap_callback:
            self.tap_callback()


class ExerciseLibraryScreen(MDScreen):
    """Browse the catalog by category and search, and manage favorites.

    Embedding screens (the workout exercise picker) pass
    ``on_exercise_select`` / ``on_batch_select`` and optionally enable
    ``allow_multi_select``; a standalone library passes neither and opens
    the exercise details on tap instead.
    """

    exercise_list = ObjectProperty(None, allownone=True)
    query = ObjectProperty(None, allownone=True)
    favorites_store = ObjectProperty(None, allownone=True)
    view_mode = StringProperty("list")
    empty_text = StringProperty("")
    batch_text = StringProperty("")
    show_batch_button = BooleanProperty(False)

    _search_event = None

    def __init__(
        self,
        stores,
        *,
        allow_multi_select: bool = False,
        on_exercise_select=None,
        on_batch_select=None,
        on_category_change=None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.stores = stores
        self.favorites_store = stores.favorites
        self.view_mode = settings.get_value("view_mode", "list") or "list"
        self.query = stores.new_query(
            category=settings.get_value("default_category", "all") or "all",
            allow_multi_select=allow_multi_select,
            on_exercise_select=on_exercise_select,
            on_batch_select=on_batch_select,
            on_category_change=on_category_change,
        )
        self.query.bind(results=self._schedule_populate, selected_ids=self._schedule_populate)
        # favorites also change the heart icons of visible rows
        self.favorites_store.bind(favorites=self._schedule_populate)
        self._build()
        self.populate()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build(self):
        root = MDBoxLayout(orientation="vertical", padding=dp(8), spacing=dp(8))

        self.search_field = MDTextField(hint_text="Buscar exercícios...")
        self.search_field.bind(text=lambda _w, text: self.update_search(text))
        root.add_widget(self.search_field)

        header = MDBoxLayout(size_hint_y=None, height=dp(48), spacing=dp(4))
        scroller = ScrollView(do_scroll_y=False)
        chips = MDBoxLayout(size_hint_x=None, spacing=dp(4))
        chips.bind(minimum_width=chips.setter("width"))
        for cat_id, label, _icon in CATEGORIES:
            chips.add_widget(
                MDFlatButton(
                    text=label,
                    on_release=lambda _btn, c=cat_id: self.query.set_category(c),
                )
            )
        scroller.add_widget(chips)
        header.add_widget(scroller)
        self.view_button = MDIconButton(on_release=lambda *_: self.toggle_view_mode())
        header.add_widget(self.view_button)
        root.add_widget(header)

        self.empty_label = MDLabel(halign="center", size_hint_y=None, height=dp(48))
        root.add_widget(self.empty_label)

        rv = RecycleView(viewclass=ExerciseRow)
        layout = RecycleGridLayout(
            cols=1,
            default_size=(None, dp(72)),
            default_size_hint=(1, None),
            size_hint_y=None,
        )
        layout.bind(minimum_height=layout.setter("height"))
        rv.add_widget(layout)
        self.list_layout = layout
        self.exercise_list = rv
        root.add_widget(rv)

        self.batch_button = MDRaisedButton(
            pos_hint={"center_x": 0.5},
            on_release=lambda *_: self.commit_batch(),
        )
        root.add_widget(self.batch_button)
        self.add_widget(root)

    # ------------------------------------------------------------------
    # Behaviour
    # ------------------------------------------------------------------
    def _schedule_populate(self, *args):
        Clock.unschedule(self._populate_now)
        Clock.schedule_once(self._populate_now, 0)

    def _populate_now(self, *args):
        self.populate()

    def populate(self):
        populate_exercises(self)
        self.empty_label.text = self.empty_text
        self.empty_label.opacity = 1 if self.empty_text else 0
        self.batch_button.text = self.batch_text
        self.batch_button.opacity = 1 if self.show_batch_button else 0
        self.batch_button.disabled = not self.show_batch_button
        self.view_button.icon = (
            "view-grid-outline" if self.view_mode == "list" else "format-list-bulleted"
        )
        self.list_layout.cols = 2 if self.view_mode == "grid" else 1

    def update_search(self, text):
        """Update search text with debounce to limit populate frequency."""
        if self._search_event:
            self._search_event.cancel()

        def apply_search(dt):
            self._search_event = None
            self.query.search_text = text

        delay = float(settings.get_value("search_debounce", 0.2) or 0)
        self._search_event = Clock.schedule_once(apply_search, delay)

    def toggle_view_mode(self):
        self.view_mode = "grid" if self.view_mode == "list" else "list"
        settings.set_value("view_mode", self.view_mode)
        self.populate()

    def on_exercise_tap(self, exercise):
        if not self.query.select(exercise):
            self.open_exercise_details(exercise)

    def open_exercise_details(self, exercise):
        if self.manager and self.manager.has_screen("exercise_detail"):
            detail = self.manager.get_screen("exercise_detail")
            detail.exercise_id = exercise.id
            detail.previous_screen = self.name
            self.manager.current = "exercise_detail"

    def commit_batch(self):
        return self.query.commit_batch()
