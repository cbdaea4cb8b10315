# viewer.py
"""
Interactive matplotlib viewer for the helix simulation.

The figure holds a 3D axes with the particle marker, its trail, a small
axes helper and an arrow along the magnetic field, plus one slider per
numeric parameter, a "Follow particle" check box and a reset button.
A ``FuncAnimation`` calls ``update_frame`` once per frame.

World coordinates are y-up, so world (x, y, z) is drawn on plot axes
(x, z, y).

Example
-------
>>> from cyclotron.simulation import Simulation
>>> from cyclotron.viewer import HelixViewer
>>> viewer = HelixViewer(Simulation())
>>> viewer.run()  # opens a window
"""

import logging

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, PillowWriter
from matplotlib.widgets import Button, CheckButtons, Slider

from cyclotron.camera import DEFAULT_CAMERA, view_angles
from cyclotron.clock import FrameClock
from cyclotron.config import PARAMETER_LABELS, PARAMETER_NAMES, PARAMETER_RANGES

logger = logging.getLogger(__name__)

AXES_HELPER_LENGTH = 5.0
FOLLOW_LABEL = 'Follow particle'


def to_plot(points):
    """Reorder world (x, y, z) columns into plot (x, z, y) order."""
    return points[..., 0], points[..., 2], points[..., 1]


class HelixViewer:
    """
    Matplotlib front end for a ``Simulation``.

    Parameters
    ----------
    simulation : Simulation
        Simulation to drive and draw.
    clock : FrameClock, optional
        Source of frame deltas when running interactively.
    fixed_delta : float, optional
        If given, every frame advances by this many seconds instead of the
        measured wall-clock delta (used when rendering to a file).

    Attributes
    ----------
    fig : matplotlib.figure.Figure
        The viewer figure.
    ax : mpl_toolkits.mplot3d.axes3d.Axes3D
        Scene axes.
    sliders : dict
        Parameter name to ``Slider``.
    """

    def __init__(self, simulation, clock=None, fixed_delta=None):
        self.sim = simulation
        self.clock = clock or FrameClock()
        self.fixed_delta = fixed_delta
        self.anim = None

        self.fig = plt.figure(figsize=(10, 8))
        self.ax = self.fig.add_subplot(111, projection='3d')
        self.fig.subplots_adjust(left=0.25, bottom=0.3)

        self.ax.set_xlabel('X')
        self.ax.set_ylabel('Z')
        self.ax.set_zlabel('Y')
        self.ax.set_title('Charged particle in a uniform magnetic field')

        self._draw_axes_helper()
        self.field_arrow = None
        self._draw_field_arrow()

        self.trail_line, = self.ax.plot([], [], [], color='blue', lw=1.5)
        self.particle, = self.ax.plot([0], [0], [0], 'o', color='red', markersize=6)
        self._apply_camera(DEFAULT_CAMERA)

        self.sliders = {}
        self._build_sliders()
        self._build_controls()

        self.fig.canvas.mpl_connect('resize_event', self._on_resize)

    # ------------------------------------------------------------------
    # Scene
    # ------------------------------------------------------------------

    def _draw_axes_helper(self):
        L = AXES_HELPER_LENGTH
        self.ax.plot([0, L], [0, 0], [0, 0], color='red', lw=1)    # world x
        self.ax.plot([0, 0], [0, 0], [0, L], color='green', lw=1)  # world y
        self.ax.plot([0, 0], [0, L], [0, 0], color='blue', lw=1)   # world z

    def _draw_field_arrow(self):
        if self.field_arrow is not None:
            self.field_arrow.remove()
            self.field_arrow = None

        field = self.sim.field
        B = field.magnetic_field(0, 0, 0)
        if field.field_strength(B) == 0:
            return
        u, v, w = to_plot(B)
        self.field_arrow = self.ax.quiver(0, 0, 0, u, v, w, color='orange', alpha=0.6,
                                          length=2.0, normalize=True)

    def _apply_camera(self, pose):
        elev, azim = view_angles(pose)
        self.ax.view_init(elev=elev, azim=azim)

        half = pose.distance / 2
        tx, ty, tz = to_plot(pose.target)
        self.ax.set_xlim(tx - half, tx + half)
        self.ax.set_ylim(ty - half, ty + half)
        self.ax.set_zlim(tz - half, tz + half)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def _build_sliders(self):
        params = self.sim.params
        for i, name in enumerate(PARAMETER_NAMES):
            vmin, vmax, step = PARAMETER_RANGES[name]
            value = getattr(params, name)
            # Widen the range so a configured value outside it is not clipped.
            vmin, vmax = min(vmin, value), max(vmax, value)

            ax_slider = self.fig.add_axes([0.25, 0.22 - i * 0.035, 0.6, 0.025],
                                          facecolor='lightgoldenrodyellow')
            slider = Slider(ax_slider, PARAMETER_LABELS[name], vmin, vmax,
                            valinit=value, valstep=step)
            slider.on_changed(self._slider_callback(name))
            self.sliders[name] = slider

    def _slider_callback(self, name):
        def update(val):
            self.sim.set_parameter(name, val)
            if name == 'field_strength':
                self._draw_field_arrow()
        return update

    def _build_controls(self):
        rax = self.fig.add_axes([0.02, 0.6, 0.18, 0.08])
        self.follow_check = CheckButtons(rax, [FOLLOW_LABEL], [self.sim.params.follow_camera])
        self.follow_check.on_clicked(self._on_follow_clicked)

        bax = self.fig.add_axes([0.02, 0.5, 0.18, 0.05])
        self.reset_button = Button(bax, 'Reset')
        self.reset_button.on_clicked(self._on_reset_clicked)

    def _on_follow_clicked(self, label):
        enabled = self.follow_check.get_status()[0]
        self.sim.set_follow_camera(enabled)
        logger.info("Follow mode %s", 'on' if enabled else 'off')

    def _on_reset_clicked(self, event):
        self.sim.reset()
        self.draw_state(self.sim.position(), self.sim.trail.to_polyline())

    def _on_resize(self, event):
        aspect = self.sim.resize(event.width, event.height)
        logger.debug("Viewport resized to %sx%s (aspect %.3f)", event.width, event.height, aspect)

    # ------------------------------------------------------------------
    # Animation
    # ------------------------------------------------------------------

    def draw_state(self, position, trail):
        """Push a position and trail polyline to the artists."""
        self.trail_line.set_data_3d(*to_plot(trail))
        x, y, z = to_plot(position)
        self.particle.set_data_3d([x], [y], [z])
        return self.particle, self.trail_line

    def _init_frame(self):
        return self.draw_state(self.sim.position(), self.sim.trail.to_polyline())

    def update_frame(self, frame_index):
        """
        Advance the simulation by one frame and redraw.

        Parameters
        ----------
        frame_index : int
            Frame number supplied by ``FuncAnimation`` (unused).

        Returns
        -------
        tuple
            Updated artists.
        """
        delta = self.fixed_delta if self.fixed_delta is not None else self.clock.get_delta()
        state = self.sim.tick(delta)
        if state.camera is not None:
            self._apply_camera(state.camera)
        return self.draw_state(state.position, state.trail)

    def run(self, interval=16):
        """Start the animation loop and show the window."""
        logger.info("Starting viewer with %s", self.sim.params)
        self.clock.start()
        self.anim = FuncAnimation(self.fig, self.update_frame, init_func=self._init_frame,
                                  interval=interval, blit=False, cache_frame_data=False)
        plt.show()

    def save(self, path, frames, fps=30):
        """
        Render ``frames`` frames at a fixed ``1/fps`` step and save a GIF.

        Parameters
        ----------
        path : str
            Output file.
        frames : int
            Number of frames to render.
        fps : int
            Frames per second of the output, also the simulated step rate.
        """
        self.fixed_delta = 1.0 / fps
        self.anim = FuncAnimation(self.fig, self.update_frame, init_func=self._init_frame,
                                  frames=frames, interval=1000 / fps, blit=False)
        self.anim.save(path, writer=PillowWriter(fps=fps))
        logger.info("Saved %d frames to %s", frames, path)
