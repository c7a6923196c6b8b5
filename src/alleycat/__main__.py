from alleycat.main import main

main()
