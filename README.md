# robotlink

Building blocks for talking to industrial robot controllers: the
simple-message wire format, and the logic that turns named joint
trajectories into the points a controller executes. The package has no
third-party dependencies.

## Modules

- `robotlink.byte_array`: `ByteArray`, a byte buffer that packs 4-byte
  integers (`load_int`), 4-byte floats (`load_real`), 1-byte booleans
  (`load_bool`) and raw bytes (`load_bytes`). Values come off the back with
  the `unload_*` methods and off the front with the `unload_front_*` methods.
  Numbers are little-endian by default, or big-endian with
  `byte_swapping=True`. Errors raise `ByteArrayError`.
- `robotlink.joint_data`: `JointData`, a fixed number of joint values
  (10 by default) that start at zero and are stored at 4-byte float
  precision. It is indexable and has `load` and `unload` for a `ByteArray`.
- `robotlink.simple_message`: `SimpleMessage`, a header (message type, comm
  type, reply code) plus a data payload, with `to_byte_array`,
  `SimpleMessage.from_byte_array`, `msg_length`, `data_length` and
  `is_valid`. The enumerations are `StandardMsgType`, `CommType` and
  `ReplyType`. An invalid header raises `MessageError`.
- `robotlink.velocity`: the `VelocityCommand` and `VelocityConfig` payloads
  and the `VelocityCommandType` enumeration.
- `robotlink.utils`: joint-name comparisons (`is_similar`, `is_same`),
  `to_map` and `map_insert`, range checks (`is_within_range`,
  `is_within_range_by_keys`, `is_within_range_named`) and
  `find_chain_joint_names`, which walks a tree of `Link` and `Joint` objects
  and raises `BranchingChainError` if the tree branches.
- `robotlink.relay`: `JointRelay` turns the joint values a controller
  reports into a `JointState`, dropping slots whose joint name is blank, and
  `handle` also returns the reply code when the controller asked for one.
- `robotlink.trajectory`: `TrajectoryConverter` validates a `JointTrajectory`
  of `TrajectoryPoint`s against velocity limits, reorders each point into the
  robot's joint order and converts it into a `RobotPoint` with a velocity
  ratio in [0, 1] and a duration in seconds. Problems raise
  `TrajectoryError`.
- `robotlink.streaming`: `download_points` prepares points for a
  whole-trajectory download (start and end markers), `pad_to_minimum` repeats
  the last point up to a minimum count, and `TrajectoryStreamer` hands out
  points one at a time (`receive`, `next_point`, `acknowledge`, `stop`).
- `robotlink.trajectory_action`: `TrajectoryAction` accepts or rejects
  `Goal`s, checks controller `Feedback` against the goal threshold, tracks
  whether the robot is in motion and aborts the goal from `watchdog` when
  feedback stops arriving.

## Installing

```
pip install .
```

## Examples

Packing and unpacking values (unloading takes from the back):

```python
from robotlink.byte_array import ByteArray

buffer = ByteArray()
buffer.load_int(42)
buffer.load_real(1.5)
print(len(buffer))           # 8
print(buffer.unload_real())  # 1.5
print(buffer.unload_int())   # 42
```

A message round trip:

```python
from robotlink.simple_message import CommType, SimpleMessage, StandardMsgType

ping = SimpleMessage(StandardMsgType.PING, CommType.SERVICE_REQUEST)
raw = ping.to_byte_array()
print(len(raw))                                   # 12
print(SimpleMessage.from_byte_array(raw) == ping)  # True
```

Converting a trajectory:

```python
from robotlink.trajectory import JointTrajectory, TrajectoryConverter, TrajectoryPoint

converter = TrajectoryConverter(["joint_1", "joint_2"], {"joint_1": 2.0, "joint_2": 2.0})
trajectory = JointTrajectory(
    joint_names=["joint_2", "joint_1"],
    points=[TrajectoryPoint(positions=[0.2, 0.1], velocities=[0.5, 1.0])],
)
for point in converter.convert(trajectory):
    print(point.velocity, point.duration)  # 0.5 10.0
```

## What it does not do

The package has no network transport: it opens no sockets and sends nothing
to a controller. `TrajectoryStreamer` and `download_points` decide which
points to send and when, but the caller does the sending, and `RobotPoint`
has no wire encoding of its own. `TrajectoryAction` runs no timers or
threads; its owner passes in feedback and robot status and calls `watchdog`
once per period. Joint names and velocity limits are passed in directly;
nothing reads them from a robot description or a parameter server. There is
no command-line program.

## Running the tests

```
pip install .[test]
pytest
```