# pose_drag_controller.py
from game.slicer import run_game


def main():
    run_game()


if __name__ == "__main__":
    main()
