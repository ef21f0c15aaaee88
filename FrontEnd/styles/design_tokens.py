# Design tokens for the TimeForge timer bar

COLORS = {
	'background': '#1E1E1E',
	'text': '#E5E7EB',
	'border': '#3C3C3C',
	'idle_bg': '#2D2D2D',
	'running_bg': '#0E639C',
	'paused_bg': '#B58900',
	'finishing_bg': '#B58900',
	'stopping_bg': '#C72E0F',
	'footer_bg': '#252526',
	'footer_text': '#CCCCCC',
}

# background per TimerPhase value
PHASE_BG = {
	'idle': COLORS['idle_bg'],
	'running': COLORS['running_bg'],
	'paused': COLORS['paused_bg'],
	'finishing': COLORS['finishing_bg'],
	'stopped': COLORS['stopping_bg'],
}

FONTS = {
	'family': 'Inter, Segoe UI, Arial, sans-serif',
	'timer_size': 20,
	'button_size': 13,
	'text': 12,
}
