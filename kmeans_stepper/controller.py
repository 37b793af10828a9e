from loguru import logger

from kmeans_stepper import session
from kmeans_stepper.render import ADVANCE, RESET, QUIT_ACTION


class IterationController:
    """ Binds user actions to the session: one advance = one iteration + one redraw. """

    def __init__(self, cfg, view, rng):
        self.cfg = cfg
        self.view = view
        self.rng = rng
        self.tol = cfg.convergence.tol
        self.state = session.KMeansState()
        self.history = []

    def start(self):
        self.state = session.initialize(self.cfg, self.rng)
        self.history = [self.state]
        self.view.draw(self.state)
        return self.state

    def advance(self):
        self.state = session.step(self.state, self.tol)
        self.history.append(self.state)
        self.view.draw(self.state)
        return self.state

    def reset(self):
        self.state = session.reset(self.cfg, self.rng)
        self.history = [self.state]
        self.view.draw(self.state)
        return self.state

    def dispatch(self, action):
        """Handles one action; returns False once the session should stop."""
        if action == ADVANCE:
            self.advance()
        elif action == RESET:
            self.reset()
        elif action == QUIT_ACTION:
            return False
        else:
            logger.warning(f"Ignoring unknown action: {action!r}")
        return True

    def run(self):
        if self.state.phase is session.Phase.UNINITIALIZED:
            self.start()
        running = True
        try:
            while running:
                for action in self.view.poll_actions():
                    running = self.dispatch(action)
                    if not running:
                        break
                self.view.wait()
        except KeyboardInterrupt:
            logger.warning("Interrupted by user, closing window")
        finally:
            self.view.close()
        logger.info(f"Session ended after {self.state.iteration} iterations")
        return self.state
