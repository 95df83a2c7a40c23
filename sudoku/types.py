Matrix = list[list[int]]
Coordinates = tuple[int, int]
TraceLog = list[str]
TraceStep = dict[str, object]
TraceMeta = dict[str, bool]
SolveOrder = str
GenerationStrategy = str
