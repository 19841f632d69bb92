from PySide6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QTabWidget, QLineEdit,
                               QListView, QTableView, QComboBox, QLabel, QPushButton, QListWidget,
                               QDockWidget, QTextEdit, QHeaderView, QFormLayout)
from PySide6.QtCore import Qt
from dataclasses import dataclass
import logging

from src.core.attribute_extractor import AttributeExtractor
from src.core.multi_predicate import MultiPredicateFilter
from src.core.settings import FilterSettings
from src.ui.models.filtered_list_model import FilteredListModel
from src.ui.models.filtered_table_model import FilteredTableModel
from src.ui.widgets.filter_line_edit import FilterLineEdit
from src.ui.widgets.linked_lists import link_list_widgets

logger = logging.getLogger(__name__)

FRUITS = ["Apple", "Banana", "banana split", "Cherry", "Grape", "Mango", "Pineapple", "Tangerine"]
PEOPLE_COLUMNS = ["Name", "City", "Role"]
PEOPLE_ROWS = [
    ("Al", "NY", "Engineer"),
    ("Bo", "LA", "Designer"),
    ("Ala", "SF", "Manager"),
    ("John", "Albany", "Operator"),
    ("Joanna", "Boston", "Engineer"),
]


@dataclass
class Person:
    name: str
    city: str
    role: str

    def get_name(self) -> str:
        return self.name

    def __str__(self):
        return f"{self.name} ({self.city}, {self.role})"


class MainWindow(QMainWindow):
    """
    Demo window for the filtering views: a filtered list, a filtered table,
    a multi-field filter and a pair of linked lists, with a log panel.
    """
    def __init__(self, settings: FilterSettings = None):
        super().__init__()
        self.settings = settings or FilterSettings()
        self.setWindowTitle("Live Filter")
        self.resize(960, 640)
        self._setup_ui()
        self._create_log_dock()

    def _setup_ui(self):
        self.tabs = QTabWidget()
        self.tabs.addTab(self._create_list_tab(), "List")
        self.tabs.addTab(self._create_table_tab(), "Table")
        self.tabs.addTab(self._create_multi_tab(), "Multi-field")
        self.tabs.addTab(self._create_linked_tab(), "Linked Lists")
        self.setCentralWidget(self.tabs)

    def _create_list_tab(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        toolbar = QHBoxLayout()
        self.txt_list_filter = QLineEdit()
        self.txt_list_filter.setPlaceholderText(self.settings.placeholder_text)
        self.btn_list_clear = QPushButton("Clear")
        toolbar.addWidget(QLabel("Filter:"))
        toolbar.addWidget(self.txt_list_filter)
        toolbar.addWidget(self.btn_list_clear)
        layout.addLayout(toolbar)

        self.list_model = FilteredListModel(FRUITS, refresh_on_add=self.settings.refresh_on_add, parent=self)
        self.list_model.bind_filter_edit(self.txt_list_filter)
        self.btn_list_clear.clicked.connect(self.list_model.clear_filter)

        self.list_view = QListView()
        self.list_view.setModel(self.list_model)
        layout.addWidget(self.list_view)

        # Same data through the self-contained line edit
        self.list_view_simple = QListView()
        self.txt_simple_filter = FilterLineEdit(self.list_view_simple)
        self.txt_simple_filter.setPlaceholderText(self.settings.placeholder_text)
        self.txt_simple_filter.set_data(FRUITS)
        layout.addWidget(QLabel("Standalone filter field:"))
        layout.addWidget(self.txt_simple_filter)
        layout.addWidget(self.list_view_simple)
        return page

    def _create_table_tab(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        search_column = self.settings.search_column
        if not 0 <= search_column < len(PEOPLE_COLUMNS):
            search_column = 0
        self.table_model = FilteredTableModel(PEOPLE_COLUMNS, search_column, parent=self)
        for row in PEOPLE_ROWS:
            self.table_model.add_row(row)

        toolbar = QHBoxLayout()
        self.cmb_filter_col = QComboBox()
        self.cmb_filter_col.addItems(PEOPLE_COLUMNS)
        self.cmb_filter_col.setCurrentIndex(search_column)
        self.cmb_filter_col.currentIndexChanged.connect(self.table_model.set_column_to_search)
        self.txt_table_filter = QLineEdit()
        self.txt_table_filter.setPlaceholderText(self.settings.placeholder_text)
        self.table_model.bind_filter_edit(self.txt_table_filter)
        self.btn_table_clear = QPushButton("Clear")
        self.btn_table_clear.clicked.connect(self.table_model.clear_filter)
        toolbar.addWidget(QLabel("Filter:"))
        toolbar.addWidget(self.cmb_filter_col)
        toolbar.addWidget(self.txt_table_filter)
        toolbar.addWidget(self.btn_table_clear)
        layout.addLayout(toolbar)

        self.table_view = QTableView()
        self.table_view.setModel(self.table_model)
        self.table_view.setAlternatingRowColors(True)
        self.table_view.setSelectionBehavior(QTableView.SelectRows)
        self.table_view.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        layout.addWidget(self.table_view)
        return page

    def _create_multi_tab(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        form = QFormLayout()
        self.txt_name_query = QLineEdit()
        self.txt_city_query = QLineEdit()
        self.txt_role_query = QLineEdit()
        form.addRow("Name contains:", self.txt_name_query)
        form.addRow("City contains:", self.txt_city_query)
        form.addRow("Role contains:", self.txt_role_query)
        layout.addLayout(form)

        self.multi_filter = MultiPredicateFilter()
        self.multi_filter.register_predicate("name", AttributeExtractor.from_getter(Person, "get_name"),
                                             self.txt_name_query.text)
        self.multi_filter.register_predicate("city", "city", self.txt_city_query.text)
        self.multi_filter.register_predicate("role", "role", self.txt_role_query.text)

        self.people = [Person(*row) for row in PEOPLE_ROWS]
        self.multi_model = FilteredListModel(self.people, parent=self)
        self.multi_view = QListView()
        self.multi_view.setModel(self.multi_model)
        layout.addWidget(self.multi_view)

        self.lbl_multi_status = QLabel()
        layout.addWidget(self.lbl_multi_status)

        for edit in (self.txt_name_query, self.txt_city_query, self.txt_role_query):
            edit.textChanged.connect(self._apply_multi_filter)
        self._apply_multi_filter()
        return page

    def _apply_multi_filter(self):
        matches = self.multi_filter.filter(self.people)
        self.multi_model.set_master(matches)
        self.lbl_multi_status.setText(f"{len(matches)} of {len(self.people)} match")

    def _create_linked_tab(self) -> QWidget:
        page = QWidget()
        layout = QHBoxLayout(page)
        self.lst_available = QListWidget()
        self.lst_available.addItems(FRUITS)
        self.lst_chosen = QListWidget()
        layout.addWidget(self.lst_available)
        layout.addWidget(self.lst_chosen)
        self.linked_lists = link_list_widgets(self.lst_available, self.lst_chosen)
        return page

    def _create_log_dock(self):
        self.dock_log = QDockWidget("Log", self)
        self.txt_log = QTextEdit()
        self.txt_log.setReadOnly(True)
        self.dock_log.setWidget(self.txt_log)
        self.addDockWidget(Qt.BottomDockWidgetArea, self.dock_log)

    def log_event(self, level: str, source: str, message: str):
        self.txt_log.append(f"[{level}] {source}: {message}")
