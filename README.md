# sandboxington

The core of a small multiplayer voxel sandbox game, as a library:

- **Wire format** (`sandboxington.bytebuffer`, `sandboxington.packets`):
  `ByteBuffer` reads and writes the little-endian packets that client and
  server exchange. `ServerPacket`, `ClientPacket` and `Identifier` name the
  packet headers. `UPS` is the world tick rate (25 per second).
- **Queues** (`sandboxington.queues`): `MessageQueue` is a locked FIFO
  whose `pop` returns `None` when it is empty. Iterating over it drains it.
  `BlockingQueue.pop` waits for an item and takes an optional timeout.
- **World simulation** (`sandboxington.world`, `sandboxington.chunk`,
  `sandboxington.voxel`, `sandboxington.position`): `World` holds the
  players and chunks. It answers connects, disconnects and movement
  packets, and moves every player once per tick. `Chunk` and `ChunkPos`
  hold 16×16×16 blocks of voxel ids. `VoxelRegistry` maps voxel ids to
  `Voxel` definitions. `PlayerPosition` carries a player's chunk, local
  position, orientation and velocity, and gives its view matrix.
- **Hosts** (`sandboxington.host`, `sandboxington.local`): `PlayerHost`,
  `ServerHost`, `ServerEndpoint` and `ClientHost` are the transport
  interfaces. `LocalServerHost` and `LocalHost` connect an in-process
  `Server` (`sandboxington.server`) to a client through a pair of
  `MessageQueue`s.
- **Client side** (`sandboxington.client_world`,
  `sandboxington.client_player`, `sandboxington.keys`): `ClientWorld`
  applies server packets and sends the local player's movement back.
  `LocalPlayer` turns key and mouse state, read from any window object that
  offers the methods in `InputWindow`, into velocity and orientation. `Key`
  and `Mouse` name the input codes.
- **Meshing** (`sandboxington.mesher`, `sandboxington.voxel_textures`):
  `mesh` turns a chunk's voxels into a list of `VoxelVertex` values. It
  emits only the faces that touch air, a transparent voxel or the chunk
  border. `VoxelTextureData` reads the texture table and supplies each
  side's texture-atlas index.

## Installing

The package needs Python 3.11 or later and depends only on numpy. The
`test` extra adds pytest for the test suite.

## Encoding a packet

```python
from sandboxington.bytebuffer import ByteBuffer

buf = ByteBuffer()
buf.put_uint(42)
buf.put_vec3((0.0, 1.5, -1.0))

buf.get_uint()   # 42
buf.get_vec3()   # (0.0, 1.5, -1.0)
```

Relative reads move the read position forward. Pass an index to read or
write at an absolute position instead. If a read would run past the end of
the data, it returns zero rather than raising.

## Passing messages between threads

```python
from sandboxington.queues import MessageQueue

queue = MessageQueue()
queue.push(b"first")
queue.push(b"second")
queue.pop()      # b"first"
queue.pop()      # b"second"
queue.pop()      # None: the queue is empty
```

## Running a world

`create_data` builds the shared world data from the voxel definitions. It
takes either a mapping or TOML text, with voxel names mapped to tables that
hold an `id` and, optionally, `transparent` and `solid` flags. Hand that
data to a `Server` with `init_world`, which also generates a flat layer of
randomly filled chunks. After that, you can call `poll` once per frame
yourself. Or you can let `run` drive the loop at a fixed 25 ticks per
second. `run` returns, and closes its host, when `exit`, `quit`, `e` or `q`
arrives on the server's `commands` queue.

For a single-player game, `LocalHost.start` runs a `Server` on a
background thread, connected to the client through in-memory queues.
`LocalHost.close` asks that server to exit and waits for it to finish.
`LocalHost` also works as a context manager:

```python
from sandboxington.client_world import ClientWorld
from sandboxington.local import LocalHost
from sandboxington.packets import ClientPacket
from sandboxington.world import create_data

data = create_data({
    "stone": {"id": 1},
    "dirt": {"id": 2},
    "sand": {"id": 3},
    "glass": {"id": 4, "transparent": True},
})
world = ClientWorld(data)

with LocalHost(seed=1) as host:
    host.start(data)
    host.send(bytes([ClientPacket.AUTHENTICATE]), True)
    # Once per frame:
    host.process(lambda: None, lambda: None,
                 lambda buf: world.read(buf.get_byte(), buf))
    world.update(host)
```

The server answers on its own thread, so its packets (the player id, the
other players and the chunks) show up over the following calls to
`process`. `ClientWorld` raises `AuthenticationDenied` if the server
refuses the client. It also keeps chat messages in `chat` and can call an
`on_chunk` function for each chunk that arrives.

## What the package does not do

It has no window, renderer or shader handling. It does not load textures,
skyboxes or 3D models. `mesh` produces vertex data but does not draw it.
The only transport it ships is the in-process `LocalHost` /
`LocalServerHost` pair, with no network host. It has no command-line
program, and it does not save worlds or players to disk.