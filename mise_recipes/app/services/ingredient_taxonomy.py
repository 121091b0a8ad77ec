"""Static ingredient taxonomy: canonical term, category and aliases."""

from typing import NamedTuple, Tuple


class TaxonomyEntry(NamedTuple):
    canonical: str
    category: str
    aliases: Tuple[str, ...] = ()


INGREDIENT_TAXONOMY: Tuple[TaxonomyEntry, ...] = (
    # Produce
    TaxonomyEntry("onion", "Produce", ("brown onion", "yellow onion", "white onion", "red onion", "spanish onion")),
    TaxonomyEntry("spring onion", "Produce", ("green onion", "scallion")),
    TaxonomyEntry("shallot", "Produce", ("eshallot", "eschallot", "french shallot", "golden shallot")),
    TaxonomyEntry("leek", "Produce"),
    TaxonomyEntry("garlic", "Produce", ("garlic clove", "clove garlic", "garlic bulb")),
    TaxonomyEntry("ginger", "Produce", ("ginger root", "fresh ginger")),
    TaxonomyEntry("chilli", "Produce", ("chili", "chile", "red chilli", "green chilli", "bird's eye chilli", "jalapeno")),
    TaxonomyEntry("capsicum", "Produce", ("bell pepper", "red pepper", "green pepper", "yellow pepper", "sweet pepper", "pepper")),
    TaxonomyEntry("tomato", "Produce", ("roma tomato", "cherry tomato", "grape tomato", "truss tomato")),
    TaxonomyEntry("potato", "Produce", ("baby potato", "russet potato", "chat potato", "waxy potato")),
    TaxonomyEntry("sweet potato", "Produce", ("kumara",)),
    TaxonomyEntry("carrot", "Produce"),
    TaxonomyEntry("celery", "Produce", ("celery stalk", "celery stick")),
    TaxonomyEntry("mushroom", "Produce", ("button mushroom", "cup mushroom", "swiss brown mushroom", "portobello mushroom", "shiitake mushroom", "cremini mushroom")),
    TaxonomyEntry("zucchini", "Produce", ("courgette",)),
    TaxonomyEntry("eggplant", "Produce", ("aubergine",)),
    TaxonomyEntry("cucumber", "Produce", ("lebanese cucumber",)),
    TaxonomyEntry("broccoli", "Produce", ("broccolini",)),
    TaxonomyEntry("cauliflower", "Produce"),
    TaxonomyEntry("cabbage", "Produce", ("red cabbage", "savoy cabbage", "wombok", "napa cabbage")),
    TaxonomyEntry("bok choy", "Produce", ("pak choy", "baby bok choy")),
    TaxonomyEntry("spinach", "Produce", ("baby spinach", "english spinach")),
    TaxonomyEntry("kale", "Produce", ("cavolo nero",)),
    TaxonomyEntry("lettuce", "Produce", ("iceberg lettuce", "cos lettuce", "romaine lettuce", "butter lettuce")),
    TaxonomyEntry("rocket", "Produce", ("arugula",)),
    TaxonomyEntry("salad mix", "Produce", ("mixed salad leaves", "salad leaves", "mixed greens", "mesclun")),
    TaxonomyEntry("pumpkin", "Produce", ("butternut pumpkin", "butternut squash", "squash")),
    TaxonomyEntry("corn", "Produce", ("corn cob", "sweetcorn", "corn kernel")),
    TaxonomyEntry("pea", "Produce", ("green pea", "garden pea", "snow pea", "sugar snap pea")),
    TaxonomyEntry("green bean", "Produce", ("string bean", "french bean")),
    TaxonomyEntry("asparagus", "Produce"),
    TaxonomyEntry("beetroot", "Produce", ("beet",)),
    TaxonomyEntry("radish", "Produce"),
    TaxonomyEntry("fennel", "Produce", ("fennel bulb",)),
    TaxonomyEntry("bean sprout", "Produce", ("mung bean sprout",)),
    TaxonomyEntry("avocado", "Produce"),
    TaxonomyEntry("lemon", "Produce", ("lemon juice", "lemon zest")),
    TaxonomyEntry("lime", "Produce", ("lime juice", "lime zest", "kaffir lime leaf", "makrut lime leaf")),
    TaxonomyEntry("orange", "Produce", ("orange juice", "orange zest")),
    TaxonomyEntry("apple", "Produce", ("granny smith apple", "pink lady apple")),
    TaxonomyEntry("pear", "Produce"),
    TaxonomyEntry("banana", "Produce"),
    TaxonomyEntry("strawberry", "Produce"),
    TaxonomyEntry("blueberry", "Produce"),
    TaxonomyEntry("raspberry", "Produce"),
    TaxonomyEntry("mango", "Produce"),
    TaxonomyEntry("pineapple", "Produce"),
    TaxonomyEntry("peach", "Produce", ("nectarine",)),
    TaxonomyEntry("grape", "Produce"),
    TaxonomyEntry("basil", "Produce", ("basil leaf", "thai basil")),
    TaxonomyEntry("coriander", "Produce", ("cilantro", "coriander leaf")),
    TaxonomyEntry("parsley", "Produce", ("flat leaf parsley", "italian parsley", "curly parsley")),
    TaxonomyEntry("mint", "Produce", ("mint leaf",)),
    TaxonomyEntry("dill", "Produce"),
    TaxonomyEntry("chive", "Produce"),
    TaxonomyEntry("rosemary", "Produce", ("rosemary sprig",)),
    TaxonomyEntry("thyme", "Produce", ("thyme sprig",)),
    TaxonomyEntry("sage", "Produce", ("sage leaf",)),
    TaxonomyEntry("lemongrass", "Produce", ("lemon grass",)),
    # Meat and seafood
    TaxonomyEntry("chicken", "Meat", ("whole chicken", "chicken piece")),
    TaxonomyEntry("chicken breast", "Meat", ("chicken breast fillet",)),
    TaxonomyEntry("chicken thigh", "Meat", ("chicken thigh fillet",)),
    TaxonomyEntry("chicken drumstick", "Meat", ("chicken leg", "chicken wing")),
    TaxonomyEntry("chicken mince", "Meat", ("ground chicken", "minced chicken")),
    TaxonomyEntry("beef", "Meat", ("beef steak", "steak", "sirloin", "rump steak", "scotch fillet", "eye fillet", "chuck steak", "beef strip", "brisket")),
    TaxonomyEntry("beef mince", "Meat", ("ground beef", "minced beef", "mince")),
    TaxonomyEntry("pork", "Meat", ("pork belly", "pork shoulder", "pork chop", "pork loin", "pork fillet", "pork tenderloin")),
    TaxonomyEntry("pork mince", "Meat", ("ground pork", "minced pork")),
    TaxonomyEntry("lamb", "Meat", ("lamb shoulder", "lamb leg", "lamb chop", "lamb cutlet", "lamb shank", "lamb mince", "ground lamb")),
    TaxonomyEntry("turkey", "Meat", ("turkey breast", "ground turkey", "turkey mince")),
    TaxonomyEntry("bacon", "Meat", ("bacon rasher", "streaky bacon", "pancetta")),
    TaxonomyEntry("ham", "Meat", ("prosciutto",)),
    TaxonomyEntry("sausage", "Meat", ("chorizo", "italian sausage", "pork sausage", "beef sausage")),
    TaxonomyEntry("salmon", "Meat", ("salmon fillet", "smoked salmon")),
    TaxonomyEntry("white fish", "Meat", ("barramundi", "snapper", "cod", "basa", "flathead", "fish fillet", "white fish fillet")),
    TaxonomyEntry("prawn", "Meat", ("shrimp", "king prawn", "tiger prawn")),
    TaxonomyEntry("mussel", "Meat", ("clam", "scallop", "squid", "calamari")),
    # Dairy
    TaxonomyEntry("milk", "Dairy", ("full cream milk", "whole milk", "skim milk", "buttermilk")),
    TaxonomyEntry("butter", "Dairy", ("unsalted butter", "salted butter")),
    TaxonomyEntry("cream", "Dairy", ("thickened cream", "heavy cream", "double cream", "pouring cream", "whipping cream", "single cream")),
    TaxonomyEntry("sour cream", "Dairy", ("creme fraiche",)),
    TaxonomyEntry("cream cheese", "Dairy"),
    TaxonomyEntry("yoghurt", "Dairy", ("yogurt", "greek yoghurt", "greek yogurt", "natural yoghurt", "plain yogurt")),
    TaxonomyEntry("egg", "Dairy", ("egg yolk", "egg white", "free range egg")),
    TaxonomyEntry("cheddar", "Dairy", ("cheddar cheese", "tasty cheese", "grated cheese", "cheese")),
    TaxonomyEntry("parmesan", "Dairy", ("parmesan cheese", "parmigiano reggiano", "pecorino")),
    TaxonomyEntry("mozzarella", "Dairy", ("mozzarella cheese", "bocconcini", "burrata")),
    TaxonomyEntry("feta", "Dairy", ("feta cheese", "goat cheese", "goat's cheese")),
    TaxonomyEntry("ricotta", "Dairy", ("ricotta cheese", "cottage cheese")),
    TaxonomyEntry("halloumi", "Dairy"),
    TaxonomyEntry("mascarpone", "Dairy"),
    # Canned and jarred
    TaxonomyEntry("canned tomato", "Canned & Jarred", ("crushed tomato", "tinned tomato", "whole peeled tomato")),
    TaxonomyEntry("tomato paste", "Canned & Jarred", ("tomato puree", "passata", "tomato passata")),
    TaxonomyEntry("chicken stock", "Canned & Jarred", ("chicken broth", "chicken stock cube")),
    TaxonomyEntry("beef stock", "Canned & Jarred", ("beef broth", "beef stock cube")),
    TaxonomyEntry("vegetable stock", "Canned & Jarred", ("vegetable broth", "veggie stock", "stock", "broth", "stock cube")),
    TaxonomyEntry("fish stock", "Canned & Jarred"),
    TaxonomyEntry("coconut milk", "Canned & Jarred", ("light coconut milk", "coconut cream")),
    TaxonomyEntry("chickpea", "Canned & Jarred", ("garbanzo bean",)),
    TaxonomyEntry("kidney bean", "Canned & Jarred", ("red kidney bean",)),
    TaxonomyEntry("black bean", "Canned & Jarred"),
    TaxonomyEntry("cannellini bean", "Canned & Jarred", ("white bean", "butter bean", "baked bean")),
    TaxonomyEntry("tuna", "Canned & Jarred", ("canned tuna", "tuna in oil")),
    TaxonomyEntry("olive", "Canned & Jarred", ("kalamata olive", "black olive", "green olive")),
    TaxonomyEntry("caper", "Canned & Jarred"),
    TaxonomyEntry("pickle", "Canned & Jarred", ("gherkin", "cornichon", "pickled jalapeno")),
    TaxonomyEntry("sun dried tomato", "Canned & Jarred", ("semi dried tomato",)),
    TaxonomyEntry("roasted capsicum", "Canned & Jarred", ("roasted red pepper",)),
    TaxonomyEntry("curry paste", "Canned & Jarred", ("red curry paste", "green curry paste", "yellow curry paste", "massaman curry paste")),
    TaxonomyEntry("pesto", "Canned & Jarred", ("basil pesto",)),
    TaxonomyEntry("salsa", "Canned & Jarred"),
    TaxonomyEntry("jam", "Canned & Jarred", ("strawberry jam", "apricot jam", "jelly")),
    TaxonomyEntry("peanut butter", "Canned & Jarred", ("smooth peanut butter", "crunchy peanut butter")),
    TaxonomyEntry("tahini", "Canned & Jarred"),
    TaxonomyEntry("pasta sauce", "Canned & Jarred", ("marinara sauce", "bolognese sauce")),
    TaxonomyEntry("creamed corn", "Canned & Jarred"),
    # Dry goods
    TaxonomyEntry("flour", "Dry Goods", ("plain flour", "all purpose flour", "self raising flour", "bread flour", "wholemeal flour")),
    TaxonomyEntry("rice", "Dry Goods", ("white rice", "brown rice", "basmati rice", "jasmine rice", "arborio rice", "sushi rice", "long grain rice")),
    TaxonomyEntry("pasta", "Dry Goods", ("spaghetti", "penne", "fettuccine", "linguine", "rigatoni", "fusilli", "macaroni", "orzo", "lasagne sheet", "lasagna sheet", "tagliatelle", "pappardelle")),
    TaxonomyEntry("noodle", "Dry Goods", ("egg noodle", "rice noodle", "udon noodle", "soba noodle", "ramen noodle", "vermicelli", "rice vermicelli")),
    TaxonomyEntry("couscous", "Dry Goods"),
    TaxonomyEntry("quinoa", "Dry Goods"),
    TaxonomyEntry("oat", "Dry Goods", ("rolled oat", "quick oat", "porridge oat")),
    TaxonomyEntry("lentil", "Dry Goods", ("red lentil", "brown lentil", "green lentil", "puy lentil")),
    TaxonomyEntry("bread", "Dry Goods", ("sourdough", "bread roll", "burger bun", "bun", "baguette", "ciabatta", "pita bread", "flatbread", "tortilla", "wrap", "naan")),
    TaxonomyEntry("breadcrumb", "Dry Goods", ("panko breadcrumb", "panko", "dried breadcrumb")),
    TaxonomyEntry("vinegar", "Dry Goods", ("white vinegar", "apple cider vinegar", "balsamic vinegar", "rice vinegar", "rice wine vinegar", "white wine vinegar")),
    TaxonomyEntry("red wine vinegar", "Dry Goods"),
    TaxonomyEntry("soy sauce", "Dry Goods", ("light soy sauce", "dark soy sauce", "tamari", "kecap manis")),
    TaxonomyEntry("fish sauce", "Dry Goods"),
    TaxonomyEntry("oyster sauce", "Dry Goods", ("hoisin sauce", "hoisin")),
    TaxonomyEntry("sriracha", "Dry Goods", ("hot sauce", "sweet chilli sauce", "chilli sauce", "tabasco")),
    TaxonomyEntry("worcestershire sauce", "Dry Goods", ("worcestershire",)),
    TaxonomyEntry("mustard", "Dry Goods", ("dijon mustard", "wholegrain mustard", "dijon", "english mustard", "yellow mustard")),
    TaxonomyEntry("tomato sauce", "Dry Goods", ("ketchup", "tomato ketchup", "bbq sauce", "barbecue sauce")),
    TaxonomyEntry("mayonnaise", "Dry Goods", ("mayo", "aioli", "kewpie mayonnaise")),
    TaxonomyEntry("almond milk", "Dry Goods", ("oat milk", "soy milk", "rice milk")),
    TaxonomyEntry("almond", "Dry Goods", ("flaked almond", "slivered almond", "almond meal", "ground almond")),
    TaxonomyEntry("walnut", "Dry Goods", ("pecan", "hazelnut")),
    TaxonomyEntry("cashew", "Dry Goods", ("cashew nut",)),
    TaxonomyEntry("peanut", "Dry Goods", ("roasted peanut",)),
    TaxonomyEntry("pine nut", "Dry Goods"),
    TaxonomyEntry("sesame seed", "Dry Goods", ("pumpkin seed", "pepita", "sunflower seed", "chia seed", "flaxseed", "linseed")),
    TaxonomyEntry("raisin", "Dry Goods", ("sultana", "currant", "dried cranberry", "dried apricot", "date", "medjool date")),
    TaxonomyEntry("chocolate", "Dry Goods", ("dark chocolate", "milk chocolate", "white chocolate", "chocolate chip", "choc chip")),
    TaxonomyEntry("cocoa powder", "Dry Goods", ("cocoa", "cacao powder")),
    TaxonomyEntry("coconut", "Dry Goods", ("desiccated coconut", "shredded coconut", "coconut flake")),
    TaxonomyEntry("cracker", "Dry Goods", ("biscuit", "rice cracker")),
    TaxonomyEntry("wine", "Dry Goods", ("red wine", "white wine", "dry white wine", "shaoxing wine", "mirin", "sake")),
    # Pantry
    TaxonomyEntry("olive oil", "Pantry", ("extra virgin olive oil", "light olive oil")),
    TaxonomyEntry("vegetable oil", "Pantry", ("canola oil", "sunflower oil", "neutral oil", "peanut oil", "rice bran oil", "cooking oil", "oil")),
    TaxonomyEntry("sesame oil", "Pantry", ("toasted sesame oil",)),
    TaxonomyEntry("coconut oil", "Pantry"),
    TaxonomyEntry("cooking spray", "Pantry", ("oil spray",)),
    TaxonomyEntry("salt", "Pantry", ("sea salt", "kosher salt", "table salt", "salt flake", "sea salt flake", "salt and pepper")),
    TaxonomyEntry("black pepper", "Pantry", ("ground black pepper", "cracked black pepper", "white pepper", "peppercorn", "black peppercorn", "cracked pepper", "ground pepper")),
    TaxonomyEntry("sugar", "Pantry", ("white sugar", "caster sugar", "granulated sugar", "brown sugar", "raw sugar", "icing sugar", "powdered sugar", "palm sugar", "demerara sugar")),
    TaxonomyEntry("honey", "Pantry"),
    TaxonomyEntry("maple syrup", "Pantry", ("golden syrup", "agave syrup", "rice malt syrup")),
    TaxonomyEntry("baking powder", "Pantry"),
    TaxonomyEntry("baking soda", "Pantry", ("bicarbonate of soda", "bicarb soda", "bicarb")),
    TaxonomyEntry("yeast", "Pantry", ("dried yeast", "instant yeast", "active dry yeast")),
    TaxonomyEntry("vanilla extract", "Pantry", ("vanilla essence", "vanilla bean paste", "vanilla", "vanilla pod")),
    TaxonomyEntry("cornflour", "Pantry", ("cornstarch", "corn starch", "potato starch", "tapioca starch")),
    TaxonomyEntry("gelatine", "Pantry", ("gelatin",)),
    TaxonomyEntry("cumin", "Pantry", ("ground cumin", "cumin seed")),
    TaxonomyEntry("coriander seed", "Pantry", ("ground coriander",)),
    TaxonomyEntry("paprika", "Pantry", ("smoked paprika", "sweet paprika")),
    TaxonomyEntry("chilli flake", "Pantry", ("red pepper flake", "chili flake", "chilli powder", "chili powder", "cayenne pepper", "cayenne")),
    TaxonomyEntry("turmeric", "Pantry", ("ground turmeric",)),
    TaxonomyEntry("cinnamon", "Pantry", ("ground cinnamon", "cinnamon stick")),
    TaxonomyEntry("nutmeg", "Pantry", ("ground nutmeg",)),
    TaxonomyEntry("ginger powder", "Pantry", ("ground ginger",)),
    TaxonomyEntry("garlic powder", "Pantry", ("garlic granule",)),
    TaxonomyEntry("onion powder", "Pantry"),
    TaxonomyEntry("curry powder", "Pantry", ("garam masala",)),
    TaxonomyEntry("five spice", "Pantry", ("chinese five spice", "star anise", "allspice", "cardamom", "cardamom pod")),
    TaxonomyEntry("oregano", "Pantry", ("dried oregano",)),
    TaxonomyEntry("mixed herbs", "Pantry", ("dried mixed herbs", "italian seasoning", "herbes de provence")),
    TaxonomyEntry("bay leaf", "Pantry", ("bay leaves", "dried bay leaf")),
    TaxonomyEntry("sesame paste", "Pantry"),
    # Other
    TaxonomyEntry("water", "Other", ("boiling water", "cold water", "warm water", "ice water")),
    TaxonomyEntry("ice", "Other", ("ice cube",)),
)
