from stackling.compiler import main
main()
