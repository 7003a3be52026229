from .models import TicketElement, TicketProject, new_element
from .printer_state import PrinterState
from .generator import CodeLine, generate_script, script_text
from .parser import parse_script
