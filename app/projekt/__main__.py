from app.projekt.shell import main

main()
