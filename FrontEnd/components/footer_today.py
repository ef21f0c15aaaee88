from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel
from FrontEnd.styles.design_tokens import COLORS, FONTS

class FooterToday(QWidget):
	"""One line listing today's recorded time per workspace."""
	def __init__(self, today_text="Today: nothing recorded yet"):
		super().__init__()
		layout = QHBoxLayout()
		layout.addStretch()
		self.label = QLabel(today_text)
		self.label.setObjectName("TodayLabel")
		layout.addWidget(self.label)
		self.setLayout(layout)
		self.setStyleSheet(f"background: {COLORS['footer_bg']}; border-radius: 6px; padding: 4px 12px; color: {COLORS['footer_text']}; font-size: {FONTS['text']}px;")
	def set_today(self, text):
		self.label.setText(text)
	def set_totals(self, totals, year_text=""):
		"""totals: [(workspace_id, human total)] as returned by SessionStore.per_workspace_totals_for_day."""
		text = "Today: " + ", ".join(f"{ws} {total}" for ws, total in totals) if totals else "Today: nothing recorded yet"
		if year_text:
			text += f"  |  {year_text}"
		self.set_today(text)
