import dataclasses

# stage names in the order the signal passes them
STAGES = (
    "input",
    "plugboard-in",
    "right-rotor",
    "middle-rotor",
    "left-rotor",
    "reflector",
    "left-rotor-return",
    "middle-rotor-return",
    "right-rotor-return",
    "plugboard-out",
    "output",
)


@dataclasses.dataclass(frozen=True)
class SignalStep:
    stage: str
    input_letter: str
    output_letter: str
    input_index: int
    output_index: int


@dataclasses.dataclass(frozen=True)
class SignalPath:
    """
    The route one key press took through the machine.
    Only used for display, the cipher never reads it back.
    """
    steps: tuple
    input_letter: str
    output_letter: str

    def stages(self) -> list:
        return [step.stage for step in self.steps]

    def format(self) -> str:
        return ' -> '.join(f'{step.stage}:{step.output_letter}' for step in self.steps)


class SignalTrace:
    """accumulates the steps of one key press, handed through the routing by the machine"""

    def __init__(self, charset: str):
        self.charset = charset
        self.steps = []

    def record(self, stage: str, input_: int, output: int):
        self.steps.append(SignalStep(stage, self.charset[input_], self.charset[output], input_, output))

    def to_path(self) -> SignalPath:
        if not self.steps:
            raise ValueError('no steps recorded')
        return SignalPath(tuple(self.steps), self.steps[0].input_letter, self.steps[-1].output_letter)
