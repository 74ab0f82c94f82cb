"""
Gesture Particle Scene

Shapes a particle cloud (heart, flower, Saturn, burst, sphere) and lets two
pinching hands scale and rotate it in real time.
"""

from gesture_particles.particle_scene import main


if __name__ == "__main__":
    main()
