"""
Othello core Python package.

Board representation and the pure rules engine, plus a small owned game handle
for presentation layers.
Modules:
- board.py: Board, cell tags, Coord
- state.py: GameState
- moves.py: legality, flip resolution, move/pass application, scoring
- errors.py: IllegalMove, IllegalPass, GameOver
- session.py: Game handle with the linear log
- cli.py: console hotseat front end
"""
