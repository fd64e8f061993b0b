"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["identity", "insert", "get", "delete", "list", "find", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#2E8B57 bold",
        "command": "#0088ff bold",
    }
)

WELCOME_TITLE = "File Descriptor Registry CLI"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "filereg> "

HELP_TEXT = """Available commands:
  identity <credential>               Set the credential sent as your caller identity
  insert <name> <file_type> <size>    Register a file descriptor owned by you
  get <key>                           Show the descriptor stored under a key
  delete <key>                        Delete a descriptor you own
  list                                List every descriptor with its full key
  find <name>                         Find the key of the first descriptor with this exact name
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Examples:
  identity alice
  insert a.txt text 100
  find a.txt
  get <key printed by find or list>
  delete <key printed by find or list>"""
