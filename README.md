# truco

A four-player game of Truco, played by two teams of two. The package holds the
rules engine, a newline-delimited JSON protocol, a TCP game server that fills
empty seats with AI players, and a network client with a text console.

## Installing

```
pip install .
```

## Running a game

The `truco` command joins a game, hosts one, or both.

Host a game for two human players and join it from the same terminal (the
other two seats go to AI players):

```
truco --serve 2
```

Join a game hosted elsewhere:

```
truco --host 192.0.2.10
```

Only host, without joining (for example when every human plays from another
machine):

```
truco --serve 4 --no-client
```

Options:

- `--serve HUMANS`: host a game for 0 to 4 human players; remaining seats are
  AI players.
- `--host`: the server to join (default `127.0.0.1`; ignored with `--serve`,
  which always joins the local server).
- `--port`: the server port (default 59821).
- `--no-client`: only host the game; needs `--serve`.

The client keeps retrying the connection every two seconds until the server
accepts it. During the game it prints each event and asks for moves: a card
number from your hand, with `c` appended to play it covered, or `t` to ask for
truco when that is allowed; `y`, `n` or `r` to accept, refuse or raise a truco;
`y` or `n` to play an eleven-hand round. The client exits when your team wins or
loses.

## Using the library

- `truco.cards`: `Suit`, `Card` and `Deck`. A card's `value` is its power, from
  0 (weakest) to 9 (strongest), and `Card.number()` gives the number printed on
  it. `Deck(rng)` holds the forty cards and `pop()` draws one at random.
- `truco.score`: `Score` tracks the stakes (1, 3, 6, 9, 12), the turns won in a
  round (best of three) and both teams' game scores up to 12.
- `truco.table`: `Table` collects the cards played in a turn and decides who won
  it, taking into account the manilha set by the table card. Covered cards lose.
- `truco.player`: `Player` holds a hand of cards.
- `truco.packets`: the messages exchanged between server and clients
  (`StartGamePacket`, `StartRoundPacket`, `CardPacket`, `TrucoPacket`, ...).
  `encode_packet` and `decode_packet` convert them to and from JSON text.
- `truco.textures`: `CardFace` and `find_texture_path`, which map a card face to
  an image file path, and `text_position_in_button` for centring a label.
- `truco.errors`: `TrucoError`, `ServerInitializationError` and `NetworkError`.

```python
import random
from truco.cards import Deck
from truco.table import Table

deck = Deck(random.Random(1))
table = Table()
table.set_table_card(deck.pop())
for player_id in range(4):
    table.place_card(deck.pop(), player_id, False)
print(table.calculate_winner())  # player id, or -1 for a draw
```

On the network side, `truco.connections.TcpServer` accepts players as
`RemotePlayer` objects, `truco.ai_player.AIPlayer` takes a seat without a
connection, and `truco.server_manager.ServerGameManager` runs the whole game
through `play_game()`, returning the winning team. `truco.app.run_server(humans,
port)` does both steps. `truco.tcp_client.TcpClient` receives packets and hands
them to handlers registered with `on()`, and
`truco.client_manager.ClientGameManager` turns them into events
(`on_round_started`, `on_my_turn_started`, `on_truco_requested`, `on_game_won`,
and so on) and sends moves with `play_card`, `request_truco`,
`respond_truco_request` and `respond_eleven_hand`.

## What it does not do

- There is no graphical table: the client is a text console, and
  `truco.textures` only computes image paths, it draws nothing.
- The AI players are simple: they always play the first card in their hand,
  now and then ask for truco, and always accept truco and eleven-hand rounds.
- The server plays a single game and only logs its end; it keeps no records.

## Tests

```
pip install .[test]
pytest
```