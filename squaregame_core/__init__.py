"""
Square game core Python package.

Pure game logic for the square game, a Nim-style race where players take
turns eating squares from one row at a time.
Modules:
- board.py: Player, Row, Board
- moves.py: Move, InvalidMove, legal moves and square selection
- ai.py: Nim-sum strategy for the computer player
- deal.py, layout.py: where boards come from
- config.py, cli.py: settings and the terminal game
"""
