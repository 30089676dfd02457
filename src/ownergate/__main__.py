from ownergate.extension import main

main()
