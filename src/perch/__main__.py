"""``python -m perch``"""

from perch.cli import main

main()
